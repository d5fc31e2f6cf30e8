"""Services implementing the release workflow."""
