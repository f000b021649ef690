"""hcli command-line entry point."""
