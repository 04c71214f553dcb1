import re
import secrets
import time
from collections.abc import Callable

from evidence_privacy.logging.logger import Log


def _random_token() -> str:
    return secrets.token_hex(8)


class IdentifierScrubber:
    """Derives anonymized evidence filenames unlinkable to the upload.

    Output format: ``evidence_{epoch_ms}_{token}.{extension}``. The timestamp
    is the processing time, never a time read from the file. The token is
    64 bits of randomness so burst uploads within one millisecond still get
    distinct names.

    Only the token is checked against the original name. The timestamp is
    fixed by the format, so its digits may still coincide with an upload
    named after an epoch or a date.
    """

    PREFIX = "evidence"
    FRAGMENT_LENGTH = 4
    MAX_TOKEN_ATTEMPTS = 8

    _EXTENSION_RE = re.compile(r"[^a-z0-9]")

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        token_factory: Callable[[], str] = _random_token,
    ) -> None:
        self._clock = clock
        self._token_factory = token_factory

    def scrub(self, original_filename: str, final_extension: str) -> str:
        """Return a fresh filename sharing nothing with *original_filename*.

        The original name is only consulted to reject tokens that happen to
        contain one of its fragments.
        """
        timestamp = int(self._clock() * 1000)
        extension = self._EXTENSION_RE.sub("", final_extension.lower()) or "bin"
        original = original_filename.lower()

        for _ in range(self.MAX_TOKEN_ATTEMPTS):
            token = self._token_factory()
            if not self._shares_fragment(token.lower(), original):
                break
        else:
            Log.warning("Random token kept overlapping the original filename")

        return f"{self.PREFIX}_{timestamp}_{token}.{extension}"

    @classmethod
    def _shares_fragment(cls, candidate: str, original: str) -> bool:
        size = cls.FRAGMENT_LENGTH
        return any(
            candidate[i : i + size] in original
            for i in range(len(candidate) - size + 1)
        )
