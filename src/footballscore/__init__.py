"""Entry point della CLI footballscore."""
