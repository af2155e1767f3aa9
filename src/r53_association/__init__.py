"""Route 53 private hosted zone / VPC association management."""

__version__ = "0.1.0"
