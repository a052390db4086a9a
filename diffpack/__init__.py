"""Implementation packages for diffkit."""
