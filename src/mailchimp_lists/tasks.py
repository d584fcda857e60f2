"""Mailchimp tasks module."""

from celery import shared_task

from mailchimp_lists import mailchimp
from mailchimp_lists.members import Member


@shared_task
def subscribe(
    list_id: str,
    email: str,
    confirm: bool = True,
    merge_fields: dict | None = None,
    tags: list[str] | None = None,
):
    """Subscribe an email address to a list."""
    return mailchimp.subscribe(list_id, email, confirm=confirm, merge_fields=merge_fields, tags=tags)


@shared_task
def unsubscribe(list_id: str, email: str):
    """Unsubscribe an email address from a list."""
    return mailchimp.unsubscribe(list_id, email)


@shared_task
def add_update_member(
    list_id: str,
    email: str,
    confirm: bool = True,
    merge_fields: dict | None = None,
    tags: list[str] | None = None,
    language: str | None = None,
    vip: bool | None = None,
):
    """Add or update a list member with its merge fields and tags."""
    member = Member(
        email=email,
        confirm=confirm,
        merge_fields=merge_fields or {},
        tags=tags or [],
        language=language,
        vip=vip,
    )
    return mailchimp.add_update_member(list_id, member)
