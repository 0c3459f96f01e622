"""Internal endpoint modules."""
