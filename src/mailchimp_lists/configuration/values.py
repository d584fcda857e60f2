"""Custom value classes for django-configurations."""

import os

from configurations import values

from mailchimp_lists.api import get_datacenter
from mailchimp_lists.exceptions import MailchimpConfigurationError


class ApiKeyValue(values.Value):
    """
    Mailchimp API key, which must end with its datacenter (``<key>-<dc>``).

    The key is read, in order of priority, from the file named by the
    environment variable `{name}_{file_suffix}`, from the environment
    variable `{name}`, or from the default value.
    """

    file_suffix = "FILE"

    def __init__(self, *args, file_suffix=None, **kwargs):
        """Initialize the value."""
        super().__init__(*args, **kwargs)
        if file_suffix:
            self.file_suffix = file_suffix

    def read_key_file(self, filename):
        """Return the key stored in a secret file, mounted by docker or kubernetes."""
        if not os.path.isfile(filename):
            raise ValueError(f"Path {filename!r} does not exist.")
        try:
            with open(filename) as file:
                return file.read().strip()
        except OSError as err:
            raise ValueError(f"Path {filename!r} cannot be read: {err!r}") from err

    def setup(self, name):
        """Get the key from a file or the environment."""
        self.value = self.default
        if not self.environ:
            return self.value

        environ_name = self.full_environ_name(name)
        key_file = os.environ.get(f"{environ_name}_{self.file_suffix}")
        if key_file:
            self.value = self.to_python(self.read_key_file(key_file))
        elif environ_name in os.environ:
            self.value = self.to_python(os.environ[environ_name])
        elif self.environ_required:
            raise ValueError(
                f"Mailchimp API key {name!r} is required, set the environment variable "
                f"{environ_name!r} or {environ_name}_{self.file_suffix!s}"
            )
        return self.value

    def to_python(self, value):
        """Check the datacenter suffix of the key."""
        try:
            get_datacenter(value)
        except MailchimpConfigurationError as err:
            raise ValueError(str(err)) from err
        return value
