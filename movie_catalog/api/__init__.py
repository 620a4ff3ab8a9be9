"""REST API for the movie catalog."""
