"""Like on a media object."""

from instagram_client.core.models.base import InstagramModel


class Like(InstagramModel):
    """A like, identified by the id the API returns for it."""
