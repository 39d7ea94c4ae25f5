"""Building blocks for the nlcron command line."""
