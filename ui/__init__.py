"""Console user interface for SocialNet."""
