# -*- coding: utf-8 -*-
"""
Form state for the password screen, independent of any widget toolkit.

The window forwards every edit here and re-renders from the resulting state:
- raw length text + "touched" flag + current inline error message
- one enabled/disabled flag per character class
- the last generated password
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Union

from password_core import (
    CHARACTER_CLASSES,
    CLASSES_BY_NAME,
    LOWER,
    MAX_LENGTH,
    MIN_LENGTH,
    GenerationError,
    GenerationRequest,
    RandomSource,
    StrengthEstimate,
    ValidationError,
    estimate_strength,
    generate_for_request,
    validate,
)

logger = logging.getLogger(__name__)


class FormSession:
    """
    One screen's worth of form state.

    Initial toggles: lowercase on, everything else off.
    Reset turns every toggle off.
    """

    def __init__(
        self,
        min_length: int = MIN_LENGTH,
        max_length: int = MAX_LENGTH,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if min_length > max_length:
            raise ValueError(f"min_length ({min_length}) is greater than max_length ({max_length}).")

        self.min_length = min_length
        self.max_length = max_length
        self._rng = rng

        self.raw_length: str = ""
        self.touched: bool = False
        self.error: Optional[str] = None
        self.password: str = ""
        self.enabled: Dict[str, bool] = {cc.name: cc is LOWER for cc in CHARACTER_CLASSES}

    # ---------- INPUT ----------

    def set_raw_length(self, text: str) -> None:
        self.raw_length = text
        self.touched = True
        result = self._validate()
        self.error = result.message if isinstance(result, ValidationError) else None

    def set_class(self, name: str, enabled: bool) -> None:
        if name not in CLASSES_BY_NAME:
            raise KeyError(name)
        self.enabled[name] = bool(enabled)

    def is_enabled(self, name: str) -> bool:
        return self.enabled[name]

    # ---------- DERIVED STATE ----------

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    @property
    def can_submit(self) -> bool:
        return not isinstance(self._validate(), ValidationError)

    def request(self) -> Union[GenerationRequest, ValidationError]:
        result = self._validate()
        if isinstance(result, ValidationError):
            return result
        return GenerationRequest(
            length=result,
            use_lower=self.enabled["lower"],
            use_upper=self.enabled["upper"],
            use_digits=self.enabled["digits"],
            use_symbols=self.enabled["symbols"],
        )

    def strength(self) -> Optional[StrengthEstimate]:
        """Preview for the current input, or None while the length is invalid."""
        req = self.request()
        if isinstance(req, ValidationError):
            return None
        return estimate_strength(req.length, req.enabled_classes())

    # ---------- ACTIONS ----------

    def submit(self) -> Union[str, ValidationError, GenerationError]:
        """
        Validate, then generate.

        The generator is never invoked when validation fails. On success the
        password is kept on the session for display.
        """
        self.touched = True
        req = self.request()
        if isinstance(req, ValidationError):
            self.error = req.message
            return req

        self.error = None
        result = generate_for_request(req, self._rng)
        if isinstance(result, GenerationError):
            logger.debug("Submit produced no password: %s", result.kind.value)
            self.password = ""
            return result

        self.password = result
        return result

    def reset(self) -> None:
        self.raw_length = ""
        self.touched = False
        self.error = None
        self.password = ""
        for name in self.enabled:
            self.enabled[name] = False

    def _validate(self) -> Union[int, ValidationError]:
        return validate(self.raw_length, self.min_length, self.max_length)
