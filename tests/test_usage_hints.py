"""Tests for usage hint formatting and clipboard writes."""

from hypothesis import given, strategies as st, settings

from svcbind.services.usage import UsageHintService

from conftest import FakeClipboard, FakeHost


class TestUsageHints:

    def test_service_env_var(self):
        assert UsageHintService().service_env_var("redis") == "SERVICE_REDIS"

    def test_service_hint_names_the_variable(self):
        hint = UsageHintService().service_hint("redis")

        assert hint == (
            "// To use service redis, we added an environment variable containing "
            "the DNS hostname: SERVICE_REDIS"
        )

    def test_catalog_env_vars(self):
        names = UsageHintService().catalog_env_vars("mydb", ["host", "port", "password"])

        assert names == ["MYDB_HOST", "MYDB_PORT", "MYDB_PASSWORD"]

    def test_catalog_hint_lists_each_variable(self):
        hint = UsageHintService().catalog_hint("mydb", ["host", "port"])

        assert hint == (
            "// To use service mydb, we added a number of environment variables\n"
            "// to your application, as listed below:\n"
            "// MYDB_HOST\n"
            "// MYDB_PORT"
        )

    def test_catalog_hint_without_keys_is_header_only(self):
        hint = UsageHintService().catalog_hint("mydb", [])

        assert hint.count("\n") == 1

    def test_write_service_hint_copies_to_clipboard(self):
        clipboard = FakeClipboard()

        message = UsageHintService().write_service_hint("redis", clipboard)

        assert clipboard.writes == [message]

    def test_write_catalog_hint_notifies_then_copies(self):
        clipboard = FakeClipboard()
        host = FakeHost()

        message = UsageHintService().write_catalog_hint("mydb", ["uri"], clipboard, host)

        assert host.infos == ["Wrote Service Usage information to your clipboard."]
        assert clipboard.writes == [message]
        assert "// MYDB_URI" in message

    @given(
        binding=st.text(alphabet="abcdefghijklmnopqrstuvwxyz-", min_size=1, max_size=20),
        keys=st.lists(st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=15), max_size=8),
    )
    @settings(max_examples=100)
    def test_one_uppercase_line_per_key(self, binding, keys):
        hint = UsageHintService().catalog_hint(binding, keys)
        lines = hint.split("\n")[2:]

        assert len(lines) == len(keys)
        for line, key in zip(lines, keys):
            assert line == f"// {binding.upper()}_{key.upper()}"
