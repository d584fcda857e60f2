"""Member related data structures."""

from dataclasses import dataclass, field
from typing import Any

from mailchimp_lists.exceptions import MailchimpUnexpectedResponseError
from mailchimp_lists.tools.email import get_subscriber_hash, normalize_email

SUBSCRIBED = "subscribed"
UNSUBSCRIBED = "unsubscribed"
CLEANED = "cleaned"
PENDING = "pending"
TRANSACTIONAL = "transactional"
NOT_FOUND = "not found"

MEMBER_STATUSES = (SUBSCRIBED, UNSUBSCRIBED, CLEANED, PENDING, TRANSACTIONAL)
ACTIVE_STATUSES = (SUBSCRIBED, PENDING)


@dataclass
class Member:
    """Member data to add or update on a Mailchimp list."""

    email: str
    confirm: bool = True
    merge_fields: dict[str, Any] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    language: str | None = None
    vip: bool | None = None
    status: str | None = None

    def __post_init__(self):
        """Normalize the email address."""
        self.email = normalize_email(self.email)
        if self.status is not None and self.status not in MEMBER_STATUSES:
            raise ValueError(f"Invalid member status {self.status!r}")

    @property
    def subscriber_hash(self) -> str:
        """Identifier of the member in the Mailchimp API."""
        return get_subscriber_hash(self.email)

    def parameters(self, include_tags: bool = False) -> dict:
        """
        Build the body sent when adding or updating the member.

        Empty collections are left out as the API rejects them. Tags are only
        honored by the API when the member is created, updates of existing
        members go through list segments instead.
        """
        status = self.status or (PENDING if self.confirm else SUBSCRIBED)
        if status == PENDING and not self.confirm:
            status = SUBSCRIBED
        parameters = {
            "email_address": self.email,
            "status_if_new": status,
            "status": status,
        }
        if self.merge_fields:
            parameters["merge_fields"] = self.merge_fields
        if self.language:
            parameters["language"] = self.language
        if self.vip is not None:
            parameters["vip"] = self.vip
        if include_tags and self.tags:
            parameters["tags"] = list(self.tags)
        return parameters


@dataclass
class MemberInfo:
    """Member as returned by the Mailchimp API."""

    status: str
    email_address: str | None = None
    id: str | None = None
    merge_fields: dict[str, Any] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_response(cls, data: dict) -> "MemberInfo":
        """Validate a decoded member response."""
        status = data.get("status")
        if status not in MEMBER_STATUSES:
            raise MailchimpUnexpectedResponseError(f"Unknown error, status value not found: {data!r}")
        return cls(
            status=status,
            email_address=data.get("email_address"),
            id=data.get("id"),
            merge_fields=data.get("merge_fields") or {},
            tags=[tag["name"] for tag in data.get("tags") or [] if "name" in tag],
        )

    @property
    def is_active(self) -> bool:
        """Return True if the member receives emails or is awaiting confirmation."""
        return self.status in ACTIVE_STATUSES


@dataclass
class Segment:
    """Named segment of a list, used to hold a tag."""

    id: int | str
    name: str
    member_count: int | None = None

    @classmethod
    def from_response(cls, data: dict) -> "Segment":
        """Validate a decoded segment response."""
        try:
            return cls(id=data["id"], name=data["name"], member_count=data.get("member_count"))
        except KeyError as err:
            raise MailchimpUnexpectedResponseError(f"Segment response without {err}: {data!r}") from err
