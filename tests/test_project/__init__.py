"""Test project for django-mailchimp-lists."""
