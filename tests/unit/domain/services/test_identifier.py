"""Unit tests for identifier sanitization."""

import pytest

from contentbase.domain.exceptions import InvalidIdentifier
from contentbase.domain.services.identifier import (
    SYSTEM_TABLES,
    Identifier,
    primary_key_identifier,
    sanitize,
    sanitize_column_name,
    sanitize_table_name,
)
from contentbase.infrastructure.persistence.database import Base


class TestSanitize:

    def test_plain_name_is_double_quoted(self):
        assert sanitize("articles").quoted == '"articles"'

    def test_embedded_double_quotes_are_doubled(self):
        identifier = sanitize('evil"; DROP TABLE users; --')
        assert identifier.quoted == '"evil""; DROP TABLE users; --"'
        assert identifier.name == 'evil"; DROP TABLE users; --'

    def test_whitespace_and_keywords_stay_inside_the_token(self):
        assert sanitize("select from").quoted == '"select from"'
        assert sanitize("order").quoted == '"order"'

    def test_single_quotes_pass_through(self):
        assert sanitize("o'brien").quoted == "\"o'brien\""

    def test_str_renders_quoted(self):
        assert str(sanitize("posts")) == '"posts"'

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_empty_names_rejected(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize(name)

    @pytest.mark.parametrize("name", [None, 42, ["posts"], b"posts"])
    def test_non_strings_rejected(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize(name)

    @pytest.mark.parametrize("name", ["bad\x00name", "line\nbreak", "bell\x07", "del\x7f"])
    def test_control_characters_rejected(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize(name)

    def test_length_limit(self):
        assert sanitize("a" * 63).name == "a" * 63
        with pytest.raises(InvalidIdentifier):
            sanitize("a" * 64)

    def test_custom_length_limit(self):
        with pytest.raises(InvalidIdentifier):
            sanitize("abcdef", max_length=5)

    def test_identifier_cannot_be_built_directly(self):
        with pytest.raises(TypeError):
            Identifier("posts")

    def test_identifiers_compare_by_name(self):
        assert sanitize("posts") == sanitize("posts")
        assert hash(sanitize("posts")) == hash(sanitize("posts"))


class TestTableAndColumnNames:

    @pytest.mark.parametrize("name", sorted(SYSTEM_TABLES))
    def test_system_tables_rejected(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize_table_name(name)

    def test_system_tables_rejected_case_insensitively(self):
        with pytest.raises(InvalidIdentifier):
            sanitize_table_name("Users")

    def test_system_tables_match_models(self):
        from contentbase.infrastructure.persistence import models  # noqa: F401

        assert SYSTEM_TABLES == frozenset(Base.metadata.tables)

    def test_regular_table_name_accepted(self):
        assert sanitize_table_name("blog_posts").name == "blog_posts"

    @pytest.mark.parametrize("name", ["id", "ID", "Id"])
    def test_primary_key_column_reserved(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize_column_name(name)

    def test_column_name_accepted(self):
        assert sanitize_column_name("identifier").name == "identifier"

    def test_primary_key_identifier(self):
        assert primary_key_identifier().quoted == '"id"'

    @pytest.mark.parametrize("name", ["posts\ud800", "\udfff"])
    def test_lone_surrogates_rejected(self, name):
        with pytest.raises(InvalidIdentifier):
            sanitize_table_name(name)
        with pytest.raises(InvalidIdentifier):
            sanitize_column_name(name)
