"""Calculator version, stamped on every run result."""

VERSION = "1.0.0"
