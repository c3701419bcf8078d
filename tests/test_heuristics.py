"""
Unit Tests — Path/Word Heuristics
=================================
Plurality, verb detection, custom methods, casing and collection endpoints.
"""
import pytest

from aip_reviewer.utils import nlp
from aip_reviewer.utils.naming import (
    CAMEL_CASE,
    KEBAB_CASE,
    LOWERCASE,
    PASCAL_CASE,
    SNAKE_CASE,
    convert_casing,
    detect_casing_style,
    is_custom_method,
    is_verb_segment,
    strip_verb_prefix,
)
from aip_reviewer.utils.path_utils import (
    compute_renamed_path,
    get_resource_segments,
    is_collection_endpoint,
    is_version_prefix,
)


# ===================================================================
# Plurality
# ===================================================================
class TestClassifyPlurality:

    def test_plural_noun(self):
        assert nlp.classify_plurality("orders") == nlp.PLURAL

    def test_singular_noun(self):
        assert nlp.classify_plurality("user") == nlp.SINGULAR

    @pytest.mark.parametrize("word", ["data", "metadata", "config", "settings", "software", "auth"])
    def test_uncountables_are_never_singular(self, word):
        assert not nlp.is_singular(word)

    def test_compound_uses_head_word(self):
        assert nlp.is_plural("orderItems")
        assert nlp.is_plural("line_items")
        assert nlp.is_singular("line-item")

    def test_pluralize(self):
        assert nlp.pluralize("user") == "users"
        assert nlp.pluralize("category") == "categories"

    def test_pluralize_leaves_plurals_and_uncountables(self):
        assert nlp.pluralize("users") == "users"
        assert nlp.pluralize("data") == "data"

    def test_singularize(self):
        assert nlp.singularize("orders") == "order"
        assert nlp.singularize("user") == "user"

    @pytest.mark.parametrize("word", ["logs", "invites", "edits"])
    def test_plurals_missing_from_noun_lemmas(self, word):
        assert nlp.is_noun(word)
        assert not nlp.is_verb(word)
        assert nlp.is_plural(word)


class TestSplitWords:

    def test_separators_and_camel_case(self):
        assert nlp.split_words("user-profile_pictures") == ["user", "profile", "pictures"]
        assert nlp.split_words("orderItems") == ["order", "Items"]

    def test_head_word(self):
        assert nlp.head_word("userAccounts") == "Accounts"


# ===================================================================
# Verbs
# ===================================================================
class TestIsVerbSegment:

    @pytest.mark.parametrize("segment", ["getUsers", "createOrder", "get_users", "delete-items"])
    def test_verb_prefixed_compounds(self, segment):
        assert is_verb_segment(segment)

    def test_bare_verb(self):
        assert is_verb_segment("create")

    @pytest.mark.parametrize("segment", ["users", "orders", "database", "pets"])
    def test_nouns(self, segment):
        assert not is_verb_segment(segment)

    @pytest.mark.parametrize("segment", ["checklist", "checklists", "checkup", "upload", "downloads", "updates"])
    def test_noun_exceptions(self, segment):
        assert not is_verb_segment(segment)

    def test_noun_verb_duality_resolves_to_noun(self):
        assert not is_verb_segment("order")

    @pytest.mark.parametrize("segment", ["logs", "invites", "edits", "likes", "deploys", "follows"])
    def test_plural_of_verb_form_is_noun(self, segment):
        assert not is_verb_segment(segment)

    def test_empty(self):
        assert not is_verb_segment("")

    def test_strip_verb_prefix(self):
        assert strip_verb_prefix("getUsers") == "users"
        assert strip_verb_prefix("get") == "resource"


# ===================================================================
# Custom methods
# ===================================================================
class TestIsCustomMethod:

    def test_colon_syntax(self):
        assert is_custom_method("{id}:cancel", "/orders/{id}:cancel", set())

    def test_hyphenated_action(self):
        assert is_custom_method("validate-hash", "/v1/files/validate-hash", set())

    def test_bare_verb_under_singleton(self):
        assert is_custom_method("backup", "/v1/database/backup", {"/v1/database"})

    def test_bare_verb_under_parameter(self):
        assert is_custom_method("archive", "/v1/projects/{id}/archive", set())

    def test_bare_verb_without_singleton_parent(self):
        assert not is_custom_method("backup", "/v1/database/backup", set())

    def test_plain_resource(self):
        assert not is_custom_method("users", "/v1/users", set())


# ===================================================================
# Casing
# ===================================================================
class TestCasing:

    @pytest.mark.parametrize("segment,style", [
        ("user_profiles", SNAKE_CASE),
        ("user-profiles", KEBAB_CASE),
        ("userProfiles", CAMEL_CASE),
        ("UserProfiles", PASCAL_CASE),
        ("users", LOWERCASE),
    ])
    def test_detect(self, segment, style):
        assert detect_casing_style(segment) == style

    def test_convert(self):
        assert convert_casing("line_items", KEBAB_CASE) == "line-items"
        assert convert_casing("line-items", CAMEL_CASE) == "lineItems"
        assert convert_casing("lineItems", SNAKE_CASE) == "line_items"
        assert convert_casing("line_items", PASCAL_CASE) == "LineItems"


# ===================================================================
# Path utils
# ===================================================================
class TestPathUtils:

    @pytest.mark.parametrize("segment", ["v1", "V2", "v2.1", "api"])
    def test_version_prefixes(self, segment):
        assert is_version_prefix(segment)

    def test_non_version(self):
        assert not is_version_prefix("vendors")

    def test_resource_segments(self):
        assert get_resource_segments("/v1/users/{id}/orders/{oid}:cancel") == ["v1", "users", "orders"]

    def test_compute_renamed_path_is_exact(self):
        assert compute_renamed_path("/user/{id}/user-settings", "user", "users") == "/users/{id}/user-settings"


class TestIsCollectionEndpoint:

    def test_plural_collection(self):
        assert is_collection_endpoint("/v1/users")

    def test_nested_collection(self):
        assert is_collection_endpoint("/v1/users/{userId}/orders")

    @pytest.mark.parametrize("path", ["/v1/users/{id}", "/health", "/v1/me", "/v1", "/", "/v1/orders/{id}:cancel"])
    def test_not_collections(self, path):
        assert not is_collection_endpoint(path)

    def test_uncountable_is_not_collection(self):
        assert not is_collection_endpoint("/v1/metadata")
