"""Tests for wildcard matching, tag lookup and filter builders"""

import pytest

from vpc_discovery.core.matching import (
    name_filter,
    tag_filter,
    value_for_tag,
    vpc_filter,
    wildcard_matches,
)


class TestWildcardMatches:
    @pytest.mark.parametrize(
        "pattern,value,expected",
        [
            ("test_*", "test_subnet_1", True),
            ("test_*", "prod_subnet_1", False),
            ("test_?", "test_1", True),
            ("test_?", "test_12", False),
            ("*", "", True),
            ("*_db", "private_db", True),
            ("a?c", "abc", True),
            ("a?c", "ac", False),
        ],
    )
    def test_glob_patterns(self, pattern, value, expected):
        assert wildcard_matches(pattern, value) is expected

    @pytest.mark.parametrize(
        "value", ["test_subnet_1", "sg.name+1", "a(b)c", "[x]", "10.0.0.0/16", ""]
    )
    def test_reflexive_without_wildcards(self, value):
        assert wildcard_matches(value, value) is True

    def test_regex_characters_are_literal(self):
        assert wildcard_matches("a.c", "abc") is False
        assert wildcard_matches("a+", "aa") is False

    def test_anchored(self):
        assert wildcard_matches("subnet", "my-subnet") is False
        assert wildcard_matches("subnet", "subnet-1") is False

    def test_wildcards_do_not_cross_colons(self):
        assert wildcard_matches("arn:aws:*", "arn:aws:ec2") is True
        assert wildcard_matches("arn:*", "arn:aws:ec2") is False
        assert wildcard_matches("a?b", "a:b") is False

    def test_none_value_never_matches(self):
        assert wildcard_matches("*", None) is False


class TestValueForTag:
    def test_first_matching_value(self):
        tags = [
            {"Key": "Tier", "Value": "private"},
            {"Key": "Name", "Value": "first"},
            {"Key": "Name", "Value": "second"},
        ]
        assert value_for_tag(tags, "Name") == "first"

    def test_missing_key(self):
        assert value_for_tag([{"Key": "Tier", "Value": "private"}], "Name") is None

    def test_no_tags(self):
        assert value_for_tag(None, "Name") is None
        assert value_for_tag([], "Name") is None


class TestFilters:
    def test_tag_filter(self):
        assert tag_filter("Name", ("a", "b")) == {"Name": "tag:Name", "Values": ["a", "b"]}

    def test_vpc_filter(self):
        assert vpc_filter("vpc-1") == {"Name": "vpc-id", "Values": ["vpc-1"]}

    def test_name_filter(self):
        assert name_filter("group-name", ["web"]) == {
            "Name": "group-name",
            "Values": ["web"],
        }
