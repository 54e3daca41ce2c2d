"""Example problems solved with detevo."""
