"""Interactive library command-line tool."""
