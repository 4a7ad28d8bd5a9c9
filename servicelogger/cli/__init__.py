"""servicelogger command-line interface."""
