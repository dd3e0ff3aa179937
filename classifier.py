"""
classifier.py
-------------
Validation and classification logic behind the /bfhl endpoint.

A request carries a list of string tokens. Tokens made only of ASCII digits
are "numbers", tokens that are exactly one ASCII letter are "alphabets",
everything else is dropped. The highest alphabet is picked case-insensitively
and the first occurrence wins a tie ("a" beats a later "A").
"""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

NUMERIC_RE = re.compile(r"[0-9]+")
ALPHA_RE = re.compile(r"[A-Za-z]")


class InvalidInputError(ValueError):
    """Request body does not have the `{"data": [str, ...]}` shape."""


# ---------------------------------------------------------------- pydantic --

class TokenRequest(BaseModel):
    data: List[StrictStr]


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str = "john_doe_17091999"
    email: str = "john@xyz.com"
    roll_number: str = "ABCD123"


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    numbers: List[str] = Field(default_factory=list)
    alphabets: List[str] = Field(default_factory=list)
    highest_alphabet: Optional[str] = None


class BfhlResponse(BaseModel):
    is_success: bool = True
    user_id: str
    email: str
    roll_number: str
    numbers: List[str]
    alphabets: List[str]
    highest_alphabet: Optional[str] = None


class ErrorResponse(BaseModel):
    is_success: bool = False
    message: str


# ------------------------------------------------------------------ logic --

def validate(body: Any) -> List[str]:
    """Return the token list from a decoded request body.

    Raises InvalidInputError for anything that is not a mapping holding a
    `data` list of strings. Numbers and nulls are never coerced to strings.
    """
    try:
        return TokenRequest.model_validate(body).data
    except ValidationError as e:
        raise InvalidInputError(f"{e.error_count()} validation error(s)") from e


def is_numeric(token: str) -> bool:
    return NUMERIC_RE.fullmatch(token) is not None


def is_alphabet(token: str) -> bool:
    return ALPHA_RE.fullmatch(token) is not None


def classify(tokens: List[str]) -> ClassificationResult:
    numbers: List[str] = []
    alphabets: List[str] = []
    highest: Optional[str] = None

    for tok in tokens:
        if is_numeric(tok):
            numbers.append(tok)
        elif is_alphabet(tok):
            alphabets.append(tok)
            # strict ">" keeps the earlier token on a case-insensitive tie
            if highest is None or tok.lower() > highest.lower():
                highest = tok

    return ClassificationResult(
        numbers=numbers,
        alphabets=alphabets,
        highest_alphabet=highest,
    )


def assemble_response(result: ClassificationResult, identity: Identity) -> BfhlResponse:
    return BfhlResponse(
        user_id=identity.user_id,
        email=identity.email,
        roll_number=identity.roll_number,
        numbers=list(result.numbers),
        alphabets=list(result.alphabets),
        highest_alphabet=result.highest_alphabet,
    )
