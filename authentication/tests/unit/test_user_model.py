import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.mark.unit
class TestDisplayName:
    def test_uses_registered_name(self):
        assert User(name="Jane Smith", email="jane@example.com").get_display_name() == "Jane Smith"

    def test_falls_back_to_email_local_part(self):
        assert User(name="", email="jane.smith@example.com").get_display_name() == "jane.smith"

    def test_falls_back_to_placeholder(self):
        assert User(name="", email="").get_display_name() == "User"
