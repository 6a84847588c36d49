from __future__ import annotations

import os

import pytest

from sgmail.domain import (
    Destination,
    EncodingError,
    InvalidFilename,
    IoError,
    Mail,
    MissingBodyError,
    SendgridError,
)


def _mail() -> Mail:
    return Mail.create(Destination("a@x.com", "A"), "Test", Destination("b@x.com", "B"))


def test_create_sets_required_fields_only():
    mail = _mail()

    assert mail.to == ("a@x.com",)
    assert mail.toname == ("A",)
    assert mail.from_ == Destination("b@x.com", "B")
    assert mail.subject == "Test"
    assert mail.cc == () and mail.bcc == ()
    assert mail.html is None and mail.text is None
    assert mail.replyto is None and mail.date is None
    assert dict(mail.attachments) == {}
    assert dict(mail.headers) == {}
    assert mail.x_smtpapi is None


def test_recipients_keep_order_and_name_pairing():
    mail = (
        _mail()
        .add_to(Destination("c@x.com", "C"))
        .add_cc(Destination("d@x.com", "D"))
        .add_cc(Destination("e@x.com", ""))
        .add_bcc(Destination("f@x.com", "F"))
        .add_to(Destination("c@x.com", "C again"))
    )

    assert mail.to == ("a@x.com", "c@x.com", "c@x.com")
    assert mail.toname == ("A", "C", "C again")
    assert mail.cc == ("d@x.com", "e@x.com")
    assert mail.ccname == ("D", "")
    assert mail.bcc == ("f@x.com",)
    assert mail.bccname == ("F",)


def test_setters_do_not_touch_earlier_references():
    base = _mail()
    with_text = base.set_text("hello")
    with_cc = with_text.add_cc(Destination("d@x.com", "D"))
    with_header = with_cc.add_header("X-Test", "1")

    assert base.text is None
    assert with_text.cc == ()
    assert dict(with_cc.headers) == {}
    assert dict(with_header.headers) == {"X-Test": "1"}


def test_set_html_keeps_text():
    mail = _mail().set_text("plain").set_html("<b>rich</b>")

    assert mail.text == "plain"
    assert mail.html == "<b>rich</b>"


def test_scalar_setters():
    mail = (
        _mail()
        .set_reply_to("reply@x.com")
        .set_date("Thu, 21 Dec 2000 16:01:07 +0200")
        .set_x_smtp_metadata('{"category":"welcome"}')
    )

    assert mail.replyto == "reply@x.com"
    assert mail.date == "Thu, 21 Dec 2000 16:01:07 +0200"
    assert mail.x_smtpapi == '{"category":"welcome"}'


def test_map_setters_overwrite_duplicates():
    mail = (
        _mail()
        .add_header("X-Test", "1")
        .add_header("X-Test", "2")
        .add_content("logo", "cid-1")
        .add_content("logo", "cid-2")
    )

    assert dict(mail.headers) == {"X-Test": "2"}
    assert dict(mail.content) == {"logo": "cid-2"}


def test_finalize_requires_a_body():
    with pytest.raises(MissingBodyError):
        _mail().finalize()


def test_missing_body_is_a_value_error():
    with pytest.raises(ValueError):
        _mail().finalize()


@pytest.mark.parametrize("setter", ["set_text", "set_html"])
def test_finalize_accepts_either_body(setter):
    mail = getattr(_mail(), setter)("body")

    assert mail.finalize() is mail


def test_add_attachment_reads_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("line one\nline two\n", encoding="utf-8")

    mail = _mail().add_attachment(path)

    assert dict(mail.attachments) == {str(path): "line one\nline two\n"}


def test_add_attachment_accepts_str_and_bytes_paths(tmp_path):
    path = tmp_path / "a.txt"
    path.write_text("hi", encoding="utf-8")

    from_str = _mail().add_attachment(str(path))
    from_bytes = _mail().add_attachment(os.fsencode(path))

    assert dict(from_str.attachments) == {str(path): "hi"}
    assert dict(from_bytes.attachments) == {str(path): "hi"}


def test_add_attachment_missing_file_raises_io_error(tmp_path):
    missing = tmp_path / "nope.txt"

    with pytest.raises(IoError) as exc_info:
        _mail().add_attachment(missing)

    assert exc_info.value.path == str(missing)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_add_attachment_non_utf8_content_raises_io_error(tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(IoError):
        _mail().add_attachment(path)


def test_add_attachment_non_utf8_bytes_path_raises_invalid_filename(tmp_path):
    bad = os.fsencode(tmp_path) + b"/\xff\xfe.txt"

    with pytest.raises(InvalidFilename):
        _mail().add_attachment(bad)


def test_add_attachment_surrogate_str_path_raises_invalid_filename(tmp_path):
    bad = str(tmp_path) + "/\udcff.txt"

    with pytest.raises(InvalidFilename):
        _mail().add_attachment(bad)


def test_failed_attachment_leaves_mail_unchanged(tmp_path):
    mail = _mail()

    with pytest.raises(SendgridError):
        mail.add_attachment(tmp_path / "missing.txt")

    assert dict(mail.attachments) == {}


def test_header_string_is_compact_json():
    mail = _mail().add_header("X-Test", "1").add_header("X-Other", "a b")

    assert mail.header_string() == '{"X-Test":"1","X-Other":"a b"}'


def test_header_string_empty():
    assert _mail().header_string() == "{}"


def test_header_string_unserializable_raises_encoding_error():
    mail = _mail().add_header("X-Test", object())

    with pytest.raises(EncodingError):
        mail.header_string()


def test_missing_body_message_allows_both_bodies():
    with pytest.raises(MissingBodyError, match="at least one of text or html"):
        _mail().finalize()
