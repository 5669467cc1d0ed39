"""Interactive terminal tools for Text2Deck."""
