"""
Unit tests for the language registry.
"""
import pytest

from collabexec.executor.languages import (
    REGISTRY,
    ExecutionMode,
    lookup,
    supported_languages,
    unsupported_language_message,
)


class TestLookup:
    def test_lookup_known_language(self):
        profile = lookup("python")
        assert profile is not None
        assert profile.id == "python"
        assert profile.mode == ExecutionMode.INTERPRET

    @pytest.mark.parametrize("language_id", ["JavaScript", "PYTHON", " cpp "])
    def test_lookup_is_case_insensitive(self, language_id):
        assert lookup(language_id) is REGISTRY[language_id.strip().lower()]

    def test_lookup_miss_returns_none(self):
        assert lookup("cobol") is None


class TestRegistryContents:
    def test_registry_order(self):
        assert supported_languages() == [
            "javascript", "python", "java", "cpp", "c", "ruby", "go", "php", "bash", "perl",
        ]

    def test_ids_are_canonical_lowercase(self):
        for key, profile in REGISTRY.items():
            assert key == profile.id == profile.id.lower()

    @pytest.mark.parametrize(
        "language_id", ["javascript", "python", "ruby", "php", "bash", "perl", "go"]
    )
    def test_interpreted_languages(self, language_id):
        profile = REGISTRY[language_id]
        assert profile.mode == ExecutionMode.INTERPRET
        assert profile.run_invocation == ()
        assert "{source}" in profile.invocation

    @pytest.mark.parametrize("language_id,compiler", [("c", "gcc"), ("cpp", "g++")])
    def test_compiled_languages_run_their_artifact(self, language_id, compiler):
        profile = REGISTRY[language_id]
        assert profile.mode == ExecutionMode.COMPILE_THEN_RUN
        assert profile.invocation[0] == compiler
        assert "{artifact}" in profile.invocation
        assert profile.run_invocation == ("{artifact}",)

    def test_go_is_single_step(self):
        assert REGISTRY["go"].invocation[:2] == ("go", "run")

    def test_java_uses_derived_name(self):
        profile = REGISTRY["java"]
        assert profile.mode == ExecutionMode.COMPILE_THEN_RUN_WITH_DERIVED_NAME
        assert profile.invocation[0] == "javac"
        assert profile.run_invocation[0] == "java"
        assert "{entry}" in profile.run_invocation


class TestDerivedName:
    def test_public_class_is_extracted(self):
        code = "import java.util.*;\npublic  class   Main {\n  public static void main(String[] a) {}\n}"
        assert REGISTRY["java"].derive_entry_name(code) == "Main"

    def test_first_public_class_wins(self):
        code = "public class Hello {}\npublic class Other {}"
        assert REGISTRY["java"].derive_entry_name(code) == "Hello"

    def test_missing_public_class(self):
        assert REGISTRY["java"].derive_entry_name("class Main {}") is None

    def test_profiles_without_pattern(self):
        assert REGISTRY["python"].derive_entry_name("public class Main {}") is None


def test_source_filename():
    assert REGISTRY["ruby"].source_filename == "code.rb"
    assert REGISTRY["bash"].source_filename == "code.sh"


def test_unsupported_message_lists_every_language():
    message = unsupported_language_message("cobol")
    assert message.startswith("Language 'cobol' is not supported.")
    assert message.endswith("Supported: " + ", ".join(supported_languages()))
