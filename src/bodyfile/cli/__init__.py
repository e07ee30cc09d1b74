"""bodyfile CLI layer."""
