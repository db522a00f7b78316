"""fluentdb command-line interface."""
