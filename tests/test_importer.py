import textwrap

from credkeep.importer import (
    detect_format, detect_format_from_filename, split_csv_line, parse_csv, parse_text, parse_credentials,
)
from credkeep.strength import estimate_strength

CSV_HEADER = "Service,Username,Password,Category,Notes"


def block(s):
    return textwrap.dedent(s).strip("\n")


# --- format detection ---

def test_detect_format():
    assert detect_format(CSV_HEADER + "\nGmail,a,b") == "csv"
    assert detect_format("service name,USERNAME,Password") == "csv"
    assert detect_format("Gmail\nUsername: x") == "text"
    assert detect_format("") == "text"

def test_detect_format_from_filename():
    assert detect_format_from_filename("export.CSV") == "csv"
    assert detect_format_from_filename("notes.txt") == "text"
    assert detect_format_from_filename("passwords") == "text"


# --- csv ---

def test_split_csv_line_quotes():
    assert split_csv_line('"Acme, Inc",bob,"p,w"') == ["Acme, Inc", "bob", "p,w"]
    assert split_csv_line("a,,c,") == ["a", "", "c", ""]
    assert split_csv_line("") == [""]

def test_csv_round_trip_row():
    creds = parse_csv(CSV_HEADER + "\nGmail,user@gmail.com,pw123,Personal,note")
    assert len(creds) == 1
    c = creds[0]
    assert c["name"] == "Gmail"
    assert c["username"] == "user@gmail.com"
    assert c["password"] == "pw123"
    assert c["category"] == "Personal"
    assert c["notes"] == "note"
    assert c["favorite"] is False
    assert c["strength"] == estimate_strength("pw123")["strength"]

def test_csv_defaults_and_skips():
    text = "\n".join([
        CSV_HEADER,
        "OnlyService",
        ",nobody,pw",
        "Gmail,user",
        "",
        "   ",
    ])
    creds = parse_csv(text)
    assert len(creds) == 1
    c = creds[0]
    assert c["name"] == "Gmail"
    assert c["password"] == ""
    assert c["category"] == "Imported"
    assert c["notes"] == ""
    assert c["strength"] == "weak"

def test_csv_quoted_fields_and_crlf():
    text = CSV_HEADER + '\r\n"Acme, Inc",bob,"p,w",Work,"a, b"\r\n'
    creds = parse_csv(text)
    assert creds[0]["name"] == "Acme, Inc"
    assert creds[0]["password"] == "p,w"
    assert creds[0]["notes"] == "a, b"

def test_csv_header_only_or_empty():
    assert parse_csv(CSV_HEADER) == []
    assert parse_csv("") == []
    assert parse_credentials("", "csv") == []


# --- text ---

def test_text_explicit_labels():
    creds = parse_text(block("""
        Gmail
        Username: user@gmail.com
        Password: Secr3t!
    """))
    assert len(creds) == 1
    c = creds[0]
    assert c["name"] == "Gmail"
    assert c["username"] == "user@gmail.com"
    assert c["password"] == "Secr3t!"
    assert c["category"] == "Imported"
    assert c["strength"] == estimate_strength("Secr3t!")["strength"]
    assert c["favorite"] is False
    assert "notes" not in c

def test_text_tab_separated_with_category():
    creds = parse_text("Acme\nKrisFlyer\nuser@acme.com\thunter22")
    assert len(creds) == 1
    c = creds[0]
    assert c["category"] == "KrisFlyer"
    assert c["username"] == "user@acme.com"
    assert c["password"] == "hunter22"

def test_text_multi_space_columns():
    creds = parse_text("Site\nme@site.com   pw9999")
    assert creds[0]["category"] == "Imported"
    assert creds[0]["username"] == "me@site.com"
    assert creds[0]["password"] == "pw9999"

def test_text_service_name_drops_parenthesised_suffix():
    creds = parse_text("Foo (old)\nfoo@example.com\nsecretpw")
    assert creds[0]["name"] == "Foo"

def test_text_notes_collection():
    creds = parse_text(block("""
        Bank (old)
        Personal
        Username: jdoe
        Password: P@ss:word1
        other@mail.com\tx1y2z3\textra
        PIN: 1234
        Questions:
        Mother maiden name
    """))
    c = creds[0]
    assert c["name"] == "Bank"
    assert c["category"] == "Personal"
    assert c["username"] == "jdoe"
    assert c["password"] == "P@ss:word1"
    assert c["notes"] == "other@mail.com\nextra\nPIN: 1234\nQuestions:\nMother maiden name"

def test_text_bare_email_and_password_lines():
    creds = parse_text("Netflix\nfamily@example.com\nmovies123\nsecond@example.com")
    c = creds[0]
    assert c["username"] == "family@example.com"
    assert c["password"] == "movies123"
    assert c["notes"] == "second@example.com"

def test_text_short_or_labelled_lines_are_not_passwords():
    creds = parse_text("Site\nme@site.com\nabc\nhint: dog")
    c = creds[0]
    assert c["password"] == ""
    assert c["notes"] == "abc\nhint: dog"

def test_text_notes_only_fallback():
    creds = parse_text("Router\nAdmin panel\nPIN: 0000")
    assert len(creds) == 1
    c = creds[0]
    assert c["username"] == ""
    assert c["password"] == ""
    assert c["strength"] == "weak"
    assert c["notes"] == "PIN: 0000"
    assert c["category"] == "Admin panel"

def test_text_nothing_importable():
    assert parse_text("") == []
    assert parse_text("  \n\n ") == []
    assert parse_text("JustAName") == []
    assert parse_text("Foo\nBar") == []

def test_parse_credentials_autodetects():
    creds = parse_credentials(CSV_HEADER + "\nGmail,user@gmail.com,pw123,Personal,note")
    assert creds[0]["category"] == "Personal"
    creds = parse_credentials("Gmail\nUsername: u@g.com\nPassword: x")
    assert creds[0]["password"] == "x"
    assert parse_credentials("") == []

def test_text_column_without_email_only_gives_password():
    creds = parse_text("Site\nmyuser\thunter22x")
    c = creds[0]
    assert c["username"] == ""
    assert c["password"] == "hunter22x"
    assert c["category"] == "Imported"
    assert "notes" not in c

def test_text_later_email_goes_to_notes_once_username_is_known():
    creds = parse_text("Acme\nKrisFlyer\nuser@acme.com\thunter22\nbackup@acme.com")
    c = creds[0]
    assert c["username"] == "user@acme.com"
    assert c["password"] == "hunter22"
    assert c["notes"] == "backup@acme.com"
