"""Enabler/payoff synergy detection inside a single pack."""

from __future__ import annotations

from collections.abc import Sequence

from ...data.models import CardRecord, CardSynergyType, SynergyFinding
from .constants import ENABLER_MARKERS, MAX_CARD_SYNERGIES, PAYOFF_MARKERS


def is_enabler(card: CardRecord) -> bool:
    """Whether a card makes things happen (tokens, triggers, tutors)."""
    return any(marker in card.oracle_text for marker in ENABLER_MARKERS)


def is_payoff(card: CardRecord) -> bool:
    """Whether a card rewards a board state or repeated triggers."""
    return any(marker in card.oracle_text for marker in PAYOFF_MARKERS)


def card_pair_strength(enabler: CardRecord, payoff: CardRecord) -> int:
    """Score how well an enabler feeds a payoff. Zero means no synergy."""
    text1 = enabler.oracle_text
    text2 = payoff.oracle_text
    type1 = enabler.type_line.lower()
    strength = 0

    # Tokens into go-wide payoffs
    if "create" in text1 and "token" in text1:
        if "creatures you control" in text2 or "for each creature" in text2:
            strength += 2

    if "artifact" in text1 or "artifact" in type1:
        if "artifacts you control" in text2 or "metalcraft" in text2:
            strength += 2

    if "graveyard" in text1 or "mill" in text1:
        if "graveyard" in text2 or "threshold" in text2:
            strength += 2

    if "instant" in type1 or "sorcery" in type1:
        if "noncreature spell" in text2 or "prowess" in text2:
            strength += 1

    return strength


def classify_synergy_type(card1: CardRecord, card2: CardRecord) -> CardSynergyType:
    """Label a pair by the first theme word either card mentions."""
    texts = (card1.oracle_text, card2.oracle_text)
    if any("token" in t for t in texts):
        return "Token"
    if any("artifact" in t for t in texts):
        return "Artifact"
    if any("graveyard" in t for t in texts):
        return "Graveyard"
    if any("spell" in t for t in texts):
        return "Spell"
    return "Generic"


def detect_card_synergies(
    cards: Sequence[CardRecord],
    limit: int = MAX_CARD_SYNERGIES,
) -> list[SynergyFinding]:
    """
    Find enabler/payoff pairs in a pack.

    Every enabler is tried against every payoff, including itself when a
    card is both. Results keep discovery order (enablers outer, payoffs
    inner) and are cut at ``limit``; they are not ranked by strength.

    Args:
        cards: Card records of one pack
        limit: Maximum findings returned

    Returns:
        Up to ``limit`` synergy findings
    """
    enablers = [card for card in cards if is_enabler(card)]
    payoffs = [card for card in cards if is_payoff(card)]

    findings: list[SynergyFinding] = []
    for enabler in enablers:
        for payoff in payoffs:
            strength = card_pair_strength(enabler, payoff)
            if strength <= 0:
                continue
            findings.append(
                SynergyFinding(
                    enabler=enabler.name,
                    payoff=payoff.name,
                    strength=strength,
                    synergy_type=classify_synergy_type(enabler, payoff),
                )
            )
            if len(findings) >= limit:
                return findings

    return findings
