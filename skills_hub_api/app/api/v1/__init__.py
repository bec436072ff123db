"""Version 1 of the Skills Hub HTTP API."""
