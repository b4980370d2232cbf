"""User interface views for Tweak Menu."""
