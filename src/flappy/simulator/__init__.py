"""Desktop host for Flappy: pygame window, screen and app wiring."""
