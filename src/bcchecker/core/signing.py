"""
Tamper-evident signing of generated text.

A signed text carries a ``@generated SignedSource<<digest>>`` marker in its
signature slot, the first place where either the public :data:`SIGNING_TOKEN`
or a signature appears. The digest is a sha256 over the whole text with the
slot holding the token, so any edit anywhere in the text invalidates it.

This is not a secrecy mechanism: the token is public and anyone can re-sign.
It only lets the checker tell a machine-generated snapshot from a hand-edited
one.

Example
-------
>>> signed = sign("# " + signing_token() + "\\n\\ntype Query { a: Int }\\n")
>>> verify(signed)
True
>>> verify(signed.replace("Int", "String"))
False
"""

from __future__ import annotations

import hashlib
import re

SIGNING_TOKEN = "@generated <<SignedSource::*O*zOeWoEQle#+L!plEphiEmie@IsG>>"

_SLOT_RE = re.compile(
    re.escape(SIGNING_TOKEN) + r"|@generated SignedSource<<(?P<digest>[a-f0-9]{64})>>"
)


def signing_token() -> str:
    """Return the fixed public marker embedded in every signed file."""
    return SIGNING_TOKEN


def _digest(text_with_token: str) -> str:
    data = text_with_token.encode("utf-8", errors="surrogatepass")
    return hashlib.sha256(data).hexdigest()


def _with_token(text: str, slot: re.Match[str]) -> str:
    return text[: slot.start()] + SIGNING_TOKEN + text[slot.end() :]


def sign(body: str) -> str:
    """
    Return ``body`` with its signature slot filled in.

    A body without a slot gets a ``# <token>`` header line prepended first.
    Signing an already signed text re-signs it, so signing is idempotent:
    ``sign(sign(b)) == sign(b)``.
    """
    slot = _SLOT_RE.search(body)
    if slot is None:
        unsigned = f"# {SIGNING_TOKEN}\n{body}"
        start = len("# ")
    else:
        unsigned = _with_token(body, slot)
        start = slot.start()
    signature = f"@generated SignedSource<<{_digest(unsigned)}>>"
    return unsigned[:start] + signature + unsigned[start + len(SIGNING_TOKEN) :]


def is_signed(text: str) -> bool:
    """Return True if ``text`` carries a well-formed signature (valid or not)."""
    slot = _SLOT_RE.search(text)
    return slot is not None and slot.group("digest") is not None


def verify(signed_text: str) -> bool:
    """
    Return whether the embedded signature matches the text it covers.

    Unsigned, garbled or multiply-signed text (including a leftover token) is
    reported as ``False``; this function does not raise on any string input.
    """
    slots = list(_SLOT_RE.finditer(signed_text))
    if len(slots) != 1 or slots[0].group("digest") is None:
        return False
    slot = slots[0]
    return slot.group("digest") == _digest(_with_token(signed_text, slot))


__all__ = ["SIGNING_TOKEN", "is_signed", "sign", "signing_token", "verify"]
