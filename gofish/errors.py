"""Error kinds raised by the Go Fish engine and belief handlers.

All of these indicate a broken contract between the engine and a seat's
belief state. None of them are recoverable: a silently patched belief
would corrupt every later decision for that seat, so they propagate out
of ``MatchEngine.step()`` unchanged.

A policy that offers no legal move is *not* an error; the engine simply
marks the match finished.
"""

from __future__ import annotations


class GoFishError(Exception):
    """Base class for engine contract violations."""


class EmptyPoolDraw(GoFishError):
    """A rank was sampled from a pool holding no cards."""


class InvalidTransferAmount(GoFishError):
    """An ask resolved with a transfer amount the rules cannot produce."""


class IllegalMove(GoFishError):
    """A handler received an event that violates the game rules."""
