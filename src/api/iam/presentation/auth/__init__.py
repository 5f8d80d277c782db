"""Login and session routes with their HTTP error mapping."""
