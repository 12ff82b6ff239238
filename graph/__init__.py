"""Phase protocols and session state for the interview controller."""
from .phases import ExitCriterion, PhaseSpec, ProtocolSpec, get_protocol, protocol_for
from .state import Directive, SessionState, Transcript, TranscriptEntry

__all__ = [
    "Directive",
    "ExitCriterion",
    "PhaseSpec",
    "ProtocolSpec",
    "SessionState",
    "Transcript",
    "TranscriptEntry",
    "get_protocol",
    "protocol_for",
]
