"""Mailchimp list management client."""

import logging

from mailchimp_lists.api import MailchimpApi
from mailchimp_lists.exceptions import (
    MailchimpConfigurationError,
    MailchimpError,
    MailchimpListNotFoundError,
    MailchimpNotFoundError,
)
from mailchimp_lists.members import NOT_FOUND, SUBSCRIBED, Member, MemberInfo, Segment
from mailchimp_lists.tools.email import get_subscriber_hash

logger = logging.getLogger(__name__)


class Mailchimp:
    """
    Domain operations on Mailchimp lists.

    Handles:
    - List lookups
    - Subscriber status checks
    - Subscriptions that never ask an already subscribed member to confirm again
    - Tag synchronization through list segments
    """

    def __init__(self, api_key: str | None = None, api: MailchimpApi | None = None, timeout: int = 10):
        """Configure the client from an API key or an existing API binding."""
        if api is None:
            if not isinstance(api_key, str):
                raise MailchimpConfigurationError("Mailchimp API key is required, set settings.MAILCHIMP['API_KEY']")
            api = MailchimpApi(api_key, timeout=timeout)
        self.api_client = api

    def get_list(self, list_id: str) -> dict:
        """Get information for the specified list."""
        return self.api_client.get_list(list_id).data

    def get_lists(self) -> list[dict]:
        """Get all available lists."""
        return self.api_client.get_lists().data.get("lists", [])

    def status(self, list_id: str, email: str) -> str:
        """
        Determine the status of a subscriber.

        Returns:
            str: one of 'subscribed', 'unsubscribed', 'cleaned', 'pending',
            'transactional' or 'not found'

        Raises:
            MailchimpListNotFoundError: If the list does not exist
            MailchimpUnexpectedResponseError: If the member has no valid status

        """
        self.check_list_exists(list_id)
        member = self._get_member(list_id, get_subscriber_hash(email))
        if member is None:
            return NOT_FOUND
        return member.status

    def check(self, list_id: str, email: str) -> bool:
        """Check if an email address is subscribed to a list, or waiting for confirmation."""
        self.check_list_exists(list_id)
        member = self._get_member(list_id, get_subscriber_hash(email))
        return member is not None and member.is_active

    def subscribe(
        self,
        list_id: str,
        email: str,
        confirm: bool = True,
        merge_fields: dict | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Add a member to the list or update an existing one."""
        if self.status(list_id, email) == SUBSCRIBED:
            # Existing subscribers are never asked to confirm again
            confirm = False
        return self.api_client.add_update(list_id, email, confirm, merge_fields or {}, tags or []).data

    def unsubscribe(self, list_id: str, email: str) -> dict:
        """Unsubscribe a member, doing nothing if they are not subscribed."""
        if not self.check(list_id, email):
            return {}
        return self.api_client.unsubscribe(list_id, email).data

    def add_update_member(self, list_id: str, member: Member) -> dict:
        """
        Add or update a member with all its parameters and tags.

        New members get their tags with the creation request. Tags of
        existing members are synchronized through segments before the update.
        """
        self.check_list_exists(list_id)
        current = self._get_member(list_id, member.subscriber_hash)
        if current is None:
            return self.api_client.add_update_member(list_id, member, include_tags=True).data

        if current.status == SUBSCRIBED:
            member.confirm = False
        self.sync_tags(list_id, member)
        return self.api_client.add_update_member(list_id, member).data

    def sync_tags(self, list_id: str, member: Member) -> dict:
        """
        Make the remote tags of a member match ``member.tags``.

        Every tag action is attempted independently, failures are logged and
        do not stop the remaining ones.

        Returns:
            dict: the tag names actually added and removed

        """
        subscriber_hash = member.subscriber_hash
        current_tags = self._get_member_tags(list_id, subscriber_hash)
        current_names = {tag["name"] for tag in current_tags}
        desired_names = list(dict.fromkeys(member.tags))
        result = {"added": [], "removed": []}

        segments = None
        for tag in current_tags:
            if tag["name"] in desired_names:
                continue
            try:
                segment_id = tag.get("id")
                if segment_id is None:
                    if segments is None:
                        segments = self._get_segments(list_id)
                    segment_id = segments[tag["name"]].id
                self.api_client.remove_segment_member(list_id, segment_id, subscriber_hash)
            except (MailchimpError, KeyError) as err:
                logger.warning("Failed to remove tag %r from member %s: %s", tag["name"], subscriber_hash, err)
            else:
                result["removed"].append(tag["name"])

        for name in desired_names:
            if name in current_names:
                continue
            try:
                if segments is None:
                    segments = self._get_segments(list_id)
                segment = segments.get(name)
                if segment is None:
                    segment = Segment.from_response(self.api_client.create_segment(list_id, name).data)
                    segments[name] = segment
                self.api_client.add_segment_member(list_id, segment.id, member.email)
            except MailchimpError as err:
                logger.warning("Failed to add tag %r to member %s: %s", name, subscriber_hash, err)
            else:
                result["added"].append(name)

        logger.info(
            "Synchronized tags of member %s on list %s: added %s, removed %s",
            subscriber_hash,
            list_id,
            result["added"],
            result["removed"],
        )
        return result

    def api(self, method: str, endpoint: str, data: dict | None = None) -> dict:
        """Make an API call directly."""
        endpoint = "/" + endpoint.lstrip("/")
        return self.api_client.call(method, endpoint, data).data

    def check_list_exists(self, list_id: str):
        """Raise MailchimpListNotFoundError if the list does not exist."""
        try:
            self.api_client.get_list(list_id)
        except MailchimpNotFoundError as err:
            raise MailchimpListNotFoundError(
                f"Mailchimp API error: list id:{list_id} does not exist",
                status_code=err.status_code,
                body=err.body,
            ) from err

    def _get_member(self, list_id: str, subscriber_hash: str) -> MemberInfo | None:
        """Fetch a member, None if it is not on the list."""
        try:
            response = self.api_client.get_member(list_id, subscriber_hash)
        except MailchimpNotFoundError:
            return None
        return MemberInfo.from_response(response.data)

    def _get_member_tags(self, list_id: str, subscriber_hash: str) -> list[dict]:
        """Fetch the current tags of a member, an empty list if they cannot be read."""
        try:
            response = self.api_client.get_member_tags(list_id, subscriber_hash)
        except MailchimpError as err:
            logger.warning("Failed to read tags of member %s on list %s: %s", subscriber_hash, list_id, err)
            return []
        return [tag for tag in response.data.get("tags") or [] if "name" in tag]

    def _get_segments(self, list_id: str) -> dict[str, Segment]:
        """Fetch the segments of a list indexed by name."""
        response = self.api_client.get_list_segments(list_id)
        segments = (Segment.from_response(data) for data in response.data.get("segments", []))
        return {segment.name: segment for segment in segments}
