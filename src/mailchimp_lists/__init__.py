"""Mailchimp lists module."""

from django.utils.functional import LazyObject

from .handler import MailchimpHandler


class DefaultMailchimp(LazyObject):
    """Lazy object to handle the default Mailchimp client."""

    def _setup(self):
        """Configure the Mailchimp client."""
        self._wrapped = mailchimp_handler()


mailchimp_handler = MailchimpHandler()
mailchimp = DefaultMailchimp()
