"""Web host binding for Go Fish bot sessions."""
