"""GitHub and bucket access."""
