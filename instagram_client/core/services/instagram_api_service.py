"""Instagram REST API client."""

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote
from uuid import uuid4

import httpx
from httpx import AsyncClient, RequestError

from instagram_client.core.config import DEFAULT_API_BASE_URL, Settings, get_settings
from instagram_client.core.exceptions import (
    APIError,
    DecodeError,
    EnvelopeError,
    InstagramAPIError,
    MalformedURLError,
    NotAuthenticatedError,
    TransportError,
    UnsupportedMethodError,
)
from instagram_client.core.logging_config import request_id_ctx
from instagram_client.core.models import (
    Comment,
    InstagramModel,
    JSONValue,
    Like,
    Location,
    Media,
    Relationship,
    RelationshipAction,
    Tag,
    User,
    decode_list,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=InstagramModel)

UserRef = Union[str, User]
MediaRef = Union[str, Media]
CommentRef = Union[str, Comment]
TagRef = Union[str, Tag]
LocationRef = Union[str, Location]


class HTTPMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def _format_param(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _coerce_method(method: Union[str, HTTPMethod]) -> HTTPMethod:
    name = method.value if isinstance(method, Enum) else str(method)
    try:
        return HTTPMethod(name.upper())
    except ValueError as e:
        raise UnsupportedMethodError(f"Unsupported HTTP method {method!r}") from e


def _path_segment(value: str) -> str:
    """Percent-encode one path segment; '/', '?' and '#' never leak through."""
    if value in ("", ".", ".."):
        raise MalformedURLError(f"Invalid path segment {value!r}")
    return quote(value, safe="")


def _resolve_id(value: Union[str, InstagramModel]) -> str:
    """Accept either a bare identifier or a model instance."""
    if isinstance(value, Tag):
        return _path_segment(value.path_name)
    if isinstance(value, InstagramModel):
        return _path_segment(value.id)
    if isinstance(value, str):
        return _path_segment(value)
    raise TypeError(f"Expected an id string or model instance, got {type(value).__name__}")


class InstagramAPIService:
    """
    Client for the Instagram REST API.

    Every call is authenticated with the access token passed as the
    ``access_token`` query parameter. Responses are expected in the
    ``{"meta": {"code": ...}, "data": ...}`` envelope; only ``code == 200``
    is treated as success. Failures are raised as subclasses of
    InstagramAPIError, so callers can tell them apart.
    """

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: Optional[str] = None,
        api_base_url: str = DEFAULT_API_BASE_URL,
        http_client: Optional[AsyncClient] = None,
    ):
        """
        Initialize Instagram API service.

        Args:
            client_id: Instagram application client id
            client_secret: Instagram application client secret
            access_token: OAuth access token, may be set later with set_access_token
            api_base_url: Versioned API root
            http_client: Pre-configured httpx client (e.g. with a mock transport);
                the caller keeps ownership and closes it
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token or None
        self.api_base_url = api_base_url.rstrip("/")
        self._client: Optional[AsyncClient] = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[AsyncClient] = None,
    ) -> "InstagramAPIService":
        settings = settings or get_settings()
        return cls(
            client_id=settings.instagram.client_id,
            client_secret=settings.instagram.client_secret,
            access_token=settings.instagram.access_token,
            api_base_url=settings.instagram.api_base_url,
            http_client=http_client,
        )

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Replace the token used for subsequent requests."""
        self.access_token = access_token or None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    async def get_client(self) -> AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = AsyncClient(follow_redirects=True)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if not self._owns_client:
            return
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.debug("Instagram API client closed")

    async def __aenter__(self) -> "InstagramAPIService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------

    def build_url(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.URL:
        """
        Build the full request URL for a relative API path.

        The access token always comes first in the query string, followed
        by params in insertion order. None values are dropped.

        Raises:
            NotAuthenticatedError: if no access token is set
            MalformedURLError: if the result is not a valid absolute URL
        """
        if not self.access_token:
            logger.error(f"Attempted Instagram API request before authentication: path={path}")
            raise NotAuthenticatedError("Access token is not set")

        query = [("access_token", self.access_token)]
        for key, value in (params or {}).items():
            if value is not None:
                query.append((key, _format_param(value)))

        try:
            url = httpx.URL(self.api_base_url + path, params=query)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise MalformedURLError(f"Invalid request path {path!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise MalformedURLError(f"Invalid request path {path!r}")
        return url

    async def perform_request(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        method: Union[str, HTTPMethod] = HTTPMethod.GET,
    ) -> JSONValue:
        """
        Perform one authenticated API call and return the envelope payload.

        Args:
            path: Path relative to the API root, e.g. "/users/self"
            params: Query parameters; None values are omitted
            method: HTTP method, as an HTTPMethod or a name in any case

        Returns:
            The "data" value of a successful envelope (may be None)

        Raises:
            NotAuthenticatedError: no access token, nothing was sent
            MalformedURLError: the URL could not be built, nothing was sent
            TransportError: network failure or empty response body
            EnvelopeError: the body is not a valid envelope
            APIError: the envelope reported a non-200 code
            UnsupportedMethodError: method is not GET/POST/PUT/DELETE, nothing was sent
        """
        method = _coerce_method(method)
        url = self.build_url(path, params)

        ctx_token = request_id_ctx.set(uuid4().hex[:8])
        try:
            logger.debug(f"Instagram API request: {method.value} {path}")
            client = await self.get_client()
            try:
                response = await client.request(method.value, url)
            except RequestError as e:
                logger.error(f"Instagram API request error: path={path}, error={str(e)}")
                raise TransportError(f"Request to {path} failed: {e}") from e

            if response.status_code != 200:
                # Body is still parsed; the envelope carries the details
                logger.warning(
                    f"Instagram API HTTP status: path={path}, "
                    f"status={response.status_code}, body={response.text[:500]}"
                )

            return self._parse_envelope(response, path)
        finally:
            request_id_ctx.reset(ctx_token)

    def _parse_envelope(self, response: httpx.Response, path: str) -> JSONValue:
        if not response.content:
            logger.error(f"Instagram API empty response: path={path}")
            raise TransportError(f"Empty response body from {path}")

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Instagram API invalid JSON: path={path}, error={str(e)}")
            raise EnvelopeError(f"Response from {path} is not valid JSON") from e

        meta = body.get("meta") if isinstance(body, dict) else None
        code = meta.get("code") if isinstance(meta, dict) else None
        if not isinstance(code, int) or isinstance(code, bool):
            logger.error(f"Instagram API response without meta code: path={path}")
            raise EnvelopeError(f"Response from {path} has no meta.code")

        if code != 200:
            error = APIError(
                code,
                error_type=meta.get("error_type"),
                error_message=meta.get("error_message"),
                status_code=response.status_code,
            )
            logger.warning(f"Instagram API error: path={path}, {error}")
            raise error

        if "data" not in body:
            logger.error(f"Instagram API response without data: path={path}")
            raise EnvelopeError(f"Response from {path} has no data")

        return body["data"]

    def objects_array(self, model: Type[ModelT], data: JSONValue) -> Optional[List[ModelT]]:
        """Convert a JSON array into models, skipping malformed elements."""
        return decode_list(model, data)

    async def _get_list(
        self,
        model: Type[ModelT],
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[ModelT]:
        data = await self.perform_request(path, params)
        objects = self.objects_array(model, data)
        if objects is None:
            logger.warning(f"Instagram API payload is not a list: path={path}")
            raise DecodeError(f"Expected a list of {model.__name__} from {path}")
        return objects

    async def _get_one(
        self,
        model: Type[ModelT],
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        method: HTTPMethod = HTTPMethod.GET,
    ) -> ModelT:
        data = await self.perform_request(path, params, method)
        try:
            return model.decode(data)
        except DecodeError:
            logger.warning(f"Instagram API payload does not decode as {model.__name__}: path={path}")
            raise

    async def _perform_action(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        method: HTTPMethod = HTTPMethod.POST,
    ) -> bool:
        method = _coerce_method(method)
        try:
            await self.perform_request(path, params, method)
        except (NotAuthenticatedError, MalformedURLError):
            raise
        except InstagramAPIError as e:
            logger.warning(f"Instagram API action failed: {method.value} {path}: {e}")
            return False
        return True

    @staticmethod
    def _build_params(**kwargs: Any) -> Dict[str, Any]:
        """Keep only the arguments that were actually given."""
        return {key: value for key, value in kwargs.items() if value is not None}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    async def get_user(self, user: Optional[UserRef] = None) -> User:
        """Get the current user, or the user with the given id."""
        user_id = _resolve_id(user) if user is not None else "self"
        return await self._get_one(User, f"/users/{user_id}")

    async def get_user_recent_media(
        self,
        user: Optional[UserRef] = None,
        count: Optional[int] = None,
        min_id: Optional[str] = None,
        max_id: Optional[str] = None,
    ) -> List[Media]:
        """Get the recent media of the current user, or of the given user."""
        user_id = _resolve_id(user) if user is not None else "self"
        params = self._build_params(count=count, min_id=min_id, max_id=max_id)
        return await self._get_list(Media, f"/users/{user_id}/media/recent", params)

    async def get_user_liked_media(
        self, count: Optional[int] = None, max_like_id: Optional[str] = None
    ) -> List[Media]:
        """Get the media recently liked by the current user."""
        params = self._build_params(count=count, max_like_id=max_like_id)
        return await self._get_list(Media, "/users/self/media/liked", params)

    async def search_for_users(self, query: str, count: Optional[int] = None) -> List[User]:
        """Search users whose username contains query."""
        params = self._build_params(q=query, count=count)
        return await self._get_list(User, "/users/search", params)

    async def search_for_user(self, username: str) -> Optional[User]:
        """
        Find the user with exactly the given username.

        Returns None when the search has no exact match.
        """
        users = await self.search_for_users(username)
        for user in users:
            if user.username == username:
                return user
        return None

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    async def get_user_follows(self) -> List[User]:
        """Get the users the current user follows."""
        return await self._get_list(User, "/users/self/follows")

    async def get_user_followed_by(self) -> List[User]:
        """Get the followers of the current user."""
        return await self._get_list(User, "/users/self/followed-by")

    async def get_user_requested_by(self) -> List[User]:
        """
        Get the pending follow requests of the current user.

        Always empty for public profiles, where requests are accepted at once.
        """
        return await self._get_list(User, "/users/self/requested-by")

    async def get_user_relationship(self, user: UserRef) -> Relationship:
        """Get the current user's relationship to the given user."""
        return await self._get_one(Relationship, f"/users/{_resolve_id(user)}/relationship")

    async def set_user_relationship(
        self,
        user: UserRef,
        action: Union[str, RelationshipAction, Relationship],
    ) -> Relationship:
        """Update the current user's relationship to the given user."""
        if isinstance(action, Relationship):
            action = action.outgoing_status
        params = {"action": _format_param(action)}
        return await self._get_one(
            Relationship,
            f"/users/{_resolve_id(user)}/relationship",
            params,
            HTTPMethod.POST,
        )

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    async def get_media(self, media: MediaRef) -> Media:
        return await self._get_one(Media, f"/media/{_resolve_id(media)}")

    async def get_media_by_shortcode(self, shortcode: str) -> Media:
        return await self._get_one(Media, f"/media/shortcode/{_path_segment(shortcode)}")

    async def search_media(
        self, lat: float, lng: float, distance: Optional[int] = None
    ) -> List[Media]:
        """
        Search media taken near the given coordinates.

        The API defaults distance to 1000 meters; the maximum is 5000.
        """
        params = self._build_params(lat=lat, lng=lng, distance=distance)
        return await self._get_list(Media, "/media/search", params)

    async def get_image_data(self, media: Union[str, Media]) -> Optional[bytes]:
        """
        Download the standard resolution image of a media object.

        Accepts a Media or an absolute image URL. Returns None when there is
        no URL to fetch.

        Raises:
            TransportError: if the download fails
        """
        url = media.standard_resolution_url if isinstance(media, Media) else media
        if not url:
            return None

        client = await self.get_client()
        try:
            response = await client.get(url)
        except (RequestError, httpx.InvalidURL) as e:
            logger.error(f"Image download error: url={url}, error={str(e)}")
            raise TransportError(f"Image download from {url} failed: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Image download failed: url={url}, status={response.status_code}")
            raise TransportError(f"Image download from {url} returned HTTP {response.status_code}")

        return response.content

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    async def get_media_comments(self, media: MediaRef) -> List[Comment]:
        return await self._get_list(Comment, f"/media/{_resolve_id(media)}/comments")

    async def add_media_comment(self, media: MediaRef, comment: CommentRef) -> bool:
        """Comment on a media object. Returns False if the API refused it."""
        text = comment.text if isinstance(comment, Comment) else comment
        return await self._perform_action(
            f"/media/{_resolve_id(media)}/comments", {"text": text}, HTTPMethod.POST
        )

    async def remove_media_comment(self, media: MediaRef, comment: CommentRef) -> bool:
        """Delete one of the current user's comments from a media object."""
        return await self._perform_action(
            f"/media/{_resolve_id(media)}/comments/{_resolve_id(comment)}",
            method=HTTPMethod.DELETE,
        )

    # ------------------------------------------------------------------
    # Likes
    # ------------------------------------------------------------------

    async def get_media_likes(self, media: MediaRef) -> List[Like]:
        return await self._get_list(Like, f"/media/{_resolve_id(media)}/likes")

    async def set_media_like(self, media: MediaRef) -> bool:
        return await self._perform_action(
            f"/media/{_resolve_id(media)}/likes", method=HTTPMethod.POST
        )

    async def remove_media_like(self, media: MediaRef) -> bool:
        return await self._perform_action(
            f"/media/{_resolve_id(media)}/likes", method=HTTPMethod.DELETE
        )

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------

    async def get_tag(self, name: TagRef) -> Tag:
        return await self._get_one(Tag, f"/tags/{_resolve_id(name)}")

    async def get_tag_recent_media(
        self,
        tag: TagRef,
        count: Optional[int] = None,
        min_tag_id: Optional[str] = None,
        max_tag_id: Optional[str] = None,
    ) -> List[Media]:
        """Get recent media carrying the given tag."""
        params = self._build_params(count=count, min_tag_id=min_tag_id, max_tag_id=max_tag_id)
        return await self._get_list(Media, f"/tags/{_resolve_id(tag)}/media/recent", params)

    async def search_tags(self, query: str) -> List[Tag]:
        return await self._get_list(Tag, "/tags/search", {"q": query})

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------

    async def get_location(self, location: LocationRef) -> Location:
        return await self._get_one(Location, f"/locations/{_resolve_id(location)}")

    async def get_location_recent_media(
        self,
        location: LocationRef,
        min_id: Optional[str] = None,
        max_id: Optional[str] = None,
    ) -> List[Media]:
        params = self._build_params(min_id=min_id, max_id=max_id)
        return await self._get_list(
            Media, f"/locations/{_resolve_id(location)}/media/recent", params
        )

    async def search_locations_by_coordinates(
        self, lat: float, lng: float, distance: Optional[int] = None
    ) -> List[Location]:
        """
        Search locations near the given coordinates.

        The API defaults distance to 1000 meters; the maximum is 5000.
        """
        params = self._build_params(lat=lat, lng=lng, distance=distance)
        return await self._get_list(Location, "/locations/search", params)

    async def search_locations_by_facebook_places_id(self, places_id: str) -> List[Location]:
        return await self._get_list(
            Location, "/locations/search", {"facebook_places_id": places_id}
        )

    async def search_locations_by_foursquare_id(self, foursquare_id: str) -> List[Location]:
        return await self._get_list(
            Location, "/locations/search", {"foursquare_id": foursquare_id}
        )

    async def search_locations_by_foursquare_v2_id(self, foursquare_id: str) -> List[Location]:
        return await self._get_list(
            Location, "/locations/search", {"foursquare_v2_id": foursquare_id}
        )
