"""Release model, version ordering and the changelog merge."""
