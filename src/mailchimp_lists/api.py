"""Low level binding of the Mailchimp Marketing API."""

import logging
from dataclasses import dataclass, field
from pprint import pformat

import requests

from mailchimp_lists.exceptions import (
    MailchimpBadRequestError,
    MailchimpConfigurationError,
    MailchimpConnectionError,
    MailchimpError,
    MailchimpInternalError,
    MailchimpNotFoundError,
)
from mailchimp_lists.members import PENDING, SUBSCRIBED, UNSUBSCRIBED, Member
from mailchimp_lists.tools.email import get_subscriber_hash, normalize_email

logger = logging.getLogger(__name__)

BASE_URL = "https://{dc}.api.mailchimp.com/3.0"
AUTH_USERNAME = "mcuser"
ALLOWED_METHODS = ("get", "put", "post", "delete", "patch")
QUERY_METHODS = ("get", "delete")


@dataclass
class ApiResponse:
    """Decoded response of a single API call."""

    status_code: int
    data: dict = field(default_factory=dict)


def get_datacenter(api_key) -> str:
    """Extract the datacenter suffix from an API key (``<key>-<dc>``)."""
    if not isinstance(api_key, str) or not api_key:
        raise MailchimpConfigurationError("Mailchimp API key is required, set settings.MAILCHIMP['API_KEY']")
    _key, separator, datacenter = api_key.rpartition("-")
    if not separator or not datacenter:
        raise MailchimpConfigurationError("Mailchimp API key must end with its datacenter, e.g. '<key>-us1'")
    return datacenter


class MailchimpApi:
    """
    Mailchimp API v3 binding.

    Every endpoint method maps to exactly one HTTP call and returns an
    ``ApiResponse``. Error statuses are raised as exceptions carrying the
    status code and the raw body, no state is kept between calls.
    """

    def __init__(self, api_key: str, timeout: int = 10, base_url: str | None = None):
        """Configure the API binding."""
        datacenter = get_datacenter(api_key)
        self._api_key = api_key
        self.base_url = base_url or BASE_URL.format(dc=datacenter)
        self.timeout = timeout
        self._session = requests.Session()
        self._session.auth = (AUTH_USERNAME, api_key)

    # Lists

    def get_lists(self, **params) -> ApiResponse:
        """Retrieve the lists of the account."""
        return self.call("get", "/lists", params)

    def get_list(self, list_id: str) -> ApiResponse:
        """Retrieve a single list."""
        return self.call("get", f"/lists/{list_id}")

    def get_list_segments(self, list_id: str, count: int = 1000) -> ApiResponse:
        """Retrieve the segments of a list."""
        return self.call("get", f"/lists/{list_id}/segments", {"count": count})

    def create_segment(self, list_id: str, name: str) -> ApiResponse:
        """Create an empty static segment, which is how Mailchimp stores a tag."""
        return self.call("post", f"/lists/{list_id}/segments", {"name": name, "static_segment": []})

    # Members

    def get_member(self, list_id: str, subscriber_hash: str) -> ApiResponse:
        """Retrieve a list member."""
        return self.call("get", f"/lists/{list_id}/members/{subscriber_hash}")

    def get_member_tags(self, list_id: str, subscriber_hash: str) -> ApiResponse:
        """Retrieve the tags of a list member."""
        return self.call("get", f"/lists/{list_id}/members/{subscriber_hash}/tags")

    def add_segment_member(self, list_id: str, segment_id, email: str) -> ApiResponse:
        """Add a member to a segment."""
        return self.call(
            "post",
            f"/lists/{list_id}/segments/{segment_id}/members",
            {"email_address": normalize_email(email)},
        )

    def remove_segment_member(self, list_id: str, segment_id, subscriber_hash: str) -> ApiResponse:
        """Remove a member from a segment."""
        return self.call("delete", f"/lists/{list_id}/segments/{segment_id}/members/{subscriber_hash}")

    def add_update(
        self,
        list_id: str,
        email: str,
        confirm: bool,
        merge_fields: dict | None = None,
        tags: list[str] | None = None,
    ) -> ApiResponse:
        """Add or update a member, asking for a confirmation if ``confirm`` is set."""
        email = normalize_email(email)
        status = PENDING if confirm else SUBSCRIBED
        data = {
            "email_address": email,
            "status_if_new": status,
            "status": status,
        }
        # The API rejects empty collections
        if merge_fields:
            data["merge_fields"] = merge_fields
        if tags:
            data["tags"] = list(tags)
        return self.call("put", f"/lists/{list_id}/members/{get_subscriber_hash(email)}", data)

    def add_update_member(self, list_id: str, member: Member, include_tags: bool = False) -> ApiResponse:
        """Add or update a member with all its parameters."""
        return self.call(
            "put",
            f"/lists/{list_id}/members/{member.subscriber_hash}",
            member.parameters(include_tags=include_tags),
        )

    def unsubscribe(self, list_id: str, email: str) -> ApiResponse:
        """Unsubscribe a member."""
        data = {
            "email_address": normalize_email(email),
            "status_if_new": UNSUBSCRIBED,
            "status": UNSUBSCRIBED,
        }
        return self.call("put", f"/lists/{list_id}/members/{get_subscriber_hash(email)}", data)

    # HTTP

    def call(self, method: str, endpoint: str, data: dict | None = None) -> ApiResponse:
        """
        Make an authenticated call to the API.

        Args:
            method: HTTP verb, one of get, put, post, delete or patch
            endpoint: path relative to the API root, starting with a slash
            data: query parameters for get and delete, JSON body otherwise

        Returns:
            ApiResponse: status code and decoded body

        Raises:
            MailchimpBadRequestError: on 4xx responses
            MailchimpNotFoundError: on 404 responses
            MailchimpInternalError: on 5xx responses
            MailchimpConnectionError: if the API cannot be reached

        """
        method = method.lower()
        if method not in ALLOWED_METHODS:
            raise MailchimpError(f"Invalid API call method: {method}")

        kwargs = {"timeout": self.timeout}
        if method in QUERY_METHODS:
            if data:
                kwargs["params"] = data
        else:
            kwargs["json"] = data or {}

        url = f"{self.base_url}{endpoint}"
        logger.debug("Mailchimp API call: %s %s", method.upper(), endpoint)
        try:
            response = self._session.request(method.upper(), url, **kwargs)
        except requests.RequestException as err:
            raise MailchimpConnectionError(f"Failed to reach the Mailchimp API: {err}") from err

        decoded = self._decode(response)
        if response.status_code >= requests.codes.bad_request:
            self._raise_api_error(response, decoded)
        return ApiResponse(status_code=response.status_code, data=decoded)

    @staticmethod
    def _decode(response) -> dict:
        """Decode the JSON body, falling back to an empty mapping."""
        try:
            decoded = response.json()
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}

    @staticmethod
    def _raise_api_error(response, decoded):
        """Raise the exception matching an error status code."""
        status_code = response.status_code
        message = f"Mailchimp API error ({status_code}): {pformat(decoded)}"
        if status_code == requests.codes.not_found:
            raise MailchimpNotFoundError(message, status_code=status_code, body=response.text)
        if status_code < requests.codes.internal_server_error:
            raise MailchimpBadRequestError(message, status_code=status_code, body=response.text)
        raise MailchimpInternalError(message, status_code=status_code, body=response.text)
