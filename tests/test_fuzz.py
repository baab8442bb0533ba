from __future__ import annotations

import os

import pytest
from reformat_comments.formatter import reformat_document

atheris = pytest.importorskip("atheris")


def test_reformat_with_fuzzed_comments():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    lines: list[str] = []

    while provider.remaining_bytes() > 0 and len(lines) < 64:
        marker = "///" if provider.ConsumeBool() else "'''"
        lines.append(f"{marker} {provider.ConsumeUnicodeNoSurrogates(48)}")

    result = reformat_document("\n".join(lines) + "\nclass C {}")

    assert result.text.endswith("class C {}\n")


def test_reformat_with_fuzzed_markup():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    tags = ["summary", "para", "code", "list", "item", "see", "c", "remarks"]
    parts: list[str] = []

    while provider.remaining_bytes() > 0 and len(parts) < 64:
        tag = tags[provider.ConsumeIntInRange(0, len(tags) - 1)]
        choice = provider.ConsumeIntInRange(0, 3)
        if choice == 0:
            parts.append(f"<{tag}>")
        elif choice == 1:
            parts.append(f"</{tag}>")
        elif choice == 2:
            parts.append(f"<{tag}/>")
        else:
            parts.append(provider.ConsumeUnicodeNoSurrogates(16).replace("\n", " "))

    source = "/// " + "".join(parts)
    result = reformat_document(source)

    assert result.text
