# =============================================================================
# Message Import Tests
# =============================================================================

import pytest

from nexmail.ingest import EmailImportError, decode_header, html_to_text, load_eml


def test_plain_text_message(sample_eml):
    imported = load_eml(sample_eml)

    assert imported.path == sample_eml
    assert imported.content.sender == "support@supabase.com"
    assert imported.content.to == "me@example.com"
    assert imported.content.subject == "Welcome to Supabase"
    assert imported.content.body.startswith("Thank you for signing up.")
    assert imported.content.body.endswith("documentation.")


def test_date_is_local_and_naive(sample_eml):
    imported = load_eml(sample_eml)

    assert imported.date is not None
    assert imported.date.tzinfo is None


def test_html_only_message(sample_html_eml):
    body = load_eml(sample_html_eml).content.body

    assert "Hello reader" in body
    assert "latest post" in body
    assert "https://example.com/post" in body
    assert "color" not in body
    assert "<p>" not in body


def test_missing_file(temp_dir):
    with pytest.raises(EmailImportError):
        load_eml(temp_dir / "nope.eml")


def test_empty_file(temp_dir):
    path = temp_dir / "empty.eml"
    path.write_text("")

    with pytest.raises(EmailImportError, match="does not look like an email"):
        load_eml(path)


def test_decode_encoded_header():
    assert decode_header("=?utf-8?b?SGVsbG8gV29ybGQ=?=") == "Hello World"
    assert decode_header("Plain subject") == "Plain subject"
    assert decode_header("") == ""


def test_html_to_text_empty():
    assert html_to_text("") == ""
    assert html_to_text("   ") == ""
