"""Services talking to the Instagram API."""
