"""Web backend for Text2Deck: OAuth flow, sessions and slide creation."""
