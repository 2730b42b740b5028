"""Strict parsing of directory response bodies.

The directory service is untrusted. A body is only accepted when it decodes to
a JSON array whose every element is an object carrying the required
:class:`~patterndir.models.RawPattern` fields. An empty array means zero
results; anything else (blank body, broken JSON, an object at the top level,
an incomplete record) is a :class:`~patterndir.exceptions.StructuralError`.
"""

from __future__ import annotations

import json

from pydantic import ValidationError

from patterndir.exceptions import StructuralError
from patterndir.models import RawPattern


class ResponseParser:
    """Parses raw response text into validated :class:`RawPattern` records."""

    def parse(self, body: str) -> list[RawPattern]:
        """Parse and validate *body*.

        Args:
            body: Raw response text from
                :meth:`~patterndir.client.fetcher.RemoteFetcher.fetch`.

        Returns:
            The validated records, possibly empty.

        Raises:
            StructuralError: If the body is blank, not valid JSON, not an
                array, or contains a record missing required fields.
        """
        if body is None or not body.strip():
            raise StructuralError(
                "The pattern directory returned an empty response where a list was expected."
            )

        try:
            decoded = json.loads(body)
        except json.JSONDecodeError as exc:
            raise StructuralError(
                f"The pattern directory returned malformed JSON: {exc.msg}",
                details={"response": body[:200]},
            ) from exc
        except RecursionError:
            raise StructuralError(
                "The pattern directory returned JSON nested too deeply to decode.",
                details={"response": body[:200]},
            ) from None

        if not isinstance(decoded, list):
            raise StructuralError(
                f"The pattern directory returned a {type(decoded).__name__} where a list was expected.",
                details={"response": body[:200]},
            )

        records: list[RawPattern] = []
        for index, item in enumerate(decoded):
            if not isinstance(item, dict):
                raise StructuralError(
                    f"Pattern #{index} is a {type(item).__name__}, not an object."
                )
            try:
                records.append(RawPattern.model_validate(item))
            except ValidationError as exc:
                missing = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
                raise StructuralError(
                    f"Pattern #{index} does not match the expected shape: {', '.join(missing)}",
                    details={"fields": missing},
                ) from None
        return records
