"""Procedural lore: species, technologies, history, legends, places and events."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, field
from typing import Any

from stellar_nexus.domain.enums import LoreType, Significance
from stellar_nexus.utils.rng import random_choice, weighted_choice

from .names import alien_name, planet_name, ship_name, station_name

ERAS = (
    "The First Expansion", "Age of Discovery", "The Great War", "Time of Silence",
    "The Nexus Awakening", "Era of Reconstruction", "The Quantum Renaissance",
    "The Void Incursion", "The Unity Period", "The Current Era",
)  # fmt: skip
CURRENT_ERA = "The Current Era"
LEGENDARY_ERA = "Time of Silence"

CONCEPTS = (
    "honor", "knowledge", "power", "harmony", "survival", "transcendence",
    "unity", "freedom", "order", "chaos", "balance", "evolution",
)  # fmt: skip
TECHNOLOGIES = (
    "Quantum Tunneling", "Neural Interface Technology", "Dimensional Manipulation",
    "Time Dilation Fields", "Consciousness Transfer", "Matter Conversion",
    "Gravity Wells", "Plasma Forging", "Bioengineering", "AI Synthesis",
)  # fmt: skip
ABILITIES = (
    "telepathic communication", "energy manipulation", "phase shifting",
    "precognitive abilities", "molecular control", "reality warping",
    "dimensional sight", "time perception", "quantum entanglement",
)  # fmt: skip
STRUCTURES = ("monoliths", "star gates", "orbital rings", "crystal spires")
FORMS = ("energy", "crystalline", "gaseous", "quantum")
METHODS = ("light pulses", "gravitational waves", "shared dreams", "harmonic resonance")
SCIENCES = ("quantum mechanics", "temporal physics", "stellar engineering", "xenobiology")
CAPABILITIES = (
    "faster-than-light communication",
    "instant matter transport",
    "the colonisation of hostile worlds",
    "the taming of dying stars",
)

SPECIES_TEMPLATES = (
    "The ancient {species} were known for their mastery of {technology}. They built great "
    "{structures} across {location} before mysteriously vanishing during {era}.",
    "{species} are a proud warrior race from the {location} system. Their culture revolves "
    "around {concept} and they are feared throughout the galaxy for their {ability}.",
    "The enigmatic {species} exist primarily as {form} beings. They communicate through "
    "{method} and possess an innate understanding of {science}.",
)
TECHNOLOGY_TEMPLATES = (
    "The {technology} was first developed by the {species} during {era}. This revolutionary "
    "advancement allowed for {capability} and changed the course of galactic civilization.",
    "{technology} remains one of the most mysterious inventions ever created. Found in ancient "
    "{location} ruins, it operates on principles that modern science still cannot fully explain.",
    "The discovery of {technology} fundamentally altered how species interact with {concept}.",
)
HISTORY_TEMPLATES = (
    "During {era}, the {species} and {rival} formed an unprecedented alliance that would shape "
    "galactic politics for millennia. This union was forged in the aftermath of the devastating "
    "conflict at {location}, where both species nearly faced extinction.",
    "{era} marked the golden age of exploration, with {species} vessels reaching the farthest "
    "corners of known space. The discovery of {location} during this period led to "
    "revolutionary advances in quantum physics and interdimensional travel.",
    "The fall of the {species} Empire during {era} was swift and unexpected. Historical records "
    "suggest that their overreliance on {technology} may have been their downfall, though the "
    "exact cause remains disputed among scholars.",
)
LEGEND_TEMPLATES = (
    "Legend speaks of {hero}, the mythical warrior who wielded the {artifact} to defend "
    "{location} from an unspeakable cosmic horror. It is said that {hero} possessed the rare "
    "gift of {ability}, allowing them to perceive threats across multiple dimensions.",
    "The tale of {hero} and the Lost Expedition to {location} has been told across countless "
    "worlds. According to legend, {hero} discovered the secret of {ability} within the ancient "
    "vaults beneath the surface of {location}, but at a terrible cost.",
    "Few believe the stories of {hero}, the dimension-walker who supposedly used the {artifact} "
    "to seal away an entity of pure chaos. The legend claims that {hero} still wanders the "
    "galaxy, watching for signs of the entity's return.",
)
LOCATION_TEMPLATES = (
    "{location} is a world of perpetual twilight, where {technology} storms create spectacular "
    "auroras that can be seen from orbit. The {species} who once inhabited this world built "
    "their cities to harness the energy from these phenomena.",
    "The station known as {location} serves as a neutral meeting ground for diplomats from "
    "across the galaxy. Its ancient {species} construction ensures it remains impregnable.",
    "{location} appears to exist in a state of temporal flux, with different regions of the "
    "planet experiencing time at varying rates. Scientists theorize that the {species} "
    "conducted temporal experiments here.",
)
EVENT_TEMPLATES = (
    "{event} occurred during {era} when the {species} attempted to harness the power of "
    "{technology}. The consequences are still felt today as fundamental changes to the fabric "
    "of space-time.",
    "Few remember the true cause of {event}. Some say it was triggered by experimental "
    "{technology}, while others blame intervention by unknown entities. What is certain is that "
    "it led to the emergence of new forms of space travel.",
    "{event} marked the beginning of {era}. The {species} archives describe it as a turning "
    "point in galactic history, though many details have been lost to time.",
)

SIGNIFICANCE_WEIGHTS = {
    Significance.MINOR: 0.4,
    Significance.MAJOR: 0.3,
    Significance.CRITICAL: 0.2,
    Significance.LEGENDARY: 0.1,
}
# codex order: most significant first
SIGNIFICANCE_ORDER = {
    Significance.LEGENDARY: 0,
    Significance.CRITICAL: 1,
    Significance.MAJOR: 2,
    Significance.MINOR: 3,
}


@dataclass(slots=True)
class LoreEntry:
    title: str
    type: LoreType
    content: str
    era: str
    significance: Significance
    related_entities: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def random_significance(rng: random.Random) -> Significance:
    return weighted_choice(rng, list(SIGNIFICANCE_WEIGHTS), list(SIGNIFICANCE_WEIGHTS.values()))


def _species_lore(rng: random.Random) -> LoreEntry:
    species = alien_name(rng)
    location = planet_name(rng)
    technology = random_choice(rng, TECHNOLOGIES)
    concept = random_choice(rng, CONCEPTS)
    era = random_choice(rng, ERAS)
    content = random_choice(rng, SPECIES_TEMPLATES).format(
        species=species,
        technology=technology,
        location=location,
        ability=random_choice(rng, ABILITIES),
        concept=concept,
        era=era,
        structures=random_choice(rng, STRUCTURES),
        form=random_choice(rng, FORMS),
        method=random_choice(rng, METHODS),
        science=random_choice(rng, SCIENCES),
    )
    return LoreEntry(
        title=f"The {species}",
        type=LoreType.SPECIES,
        content=content,
        era=era,
        significance=random_significance(rng),
        related_entities=[species, location, technology],
        tags=["alien species", "civilization", concept],
    )


def _technology_lore(rng: random.Random) -> LoreEntry:
    technology = random_choice(rng, TECHNOLOGIES)
    species = alien_name(rng)
    location = planet_name(rng)
    era = random_choice(rng, ERAS)
    content = random_choice(rng, TECHNOLOGY_TEMPLATES).format(
        technology=technology,
        species=species,
        location=location,
        era=era,
        concept=random_choice(rng, CONCEPTS),
        capability=random_choice(rng, CAPABILITIES),
    )
    return LoreEntry(
        title=technology,
        type=LoreType.TECHNOLOGY,
        content=content,
        era=era,
        significance=random_significance(rng),
        related_entities=[technology, species, location],
        tags=["technology", "innovation", "science"],
    )


def _history_lore(rng: random.Random) -> LoreEntry:
    era = random_choice(rng, ERAS)
    species = alien_name(rng)
    rival = alien_name(rng)
    location = planet_name(rng)
    content = random_choice(rng, HISTORY_TEMPLATES).format(
        era=era,
        species=species,
        rival=rival,
        location=location,
        technology=random_choice(rng, TECHNOLOGIES),
    )
    return LoreEntry(
        title=f"Chronicles of {era}",
        type=LoreType.HISTORY,
        content=content,
        era=era,
        significance=Significance.MAJOR,
        related_entities=[species, rival, location],
        tags=["historical", "galactic events", "civilization"],
    )


def _legend_lore(rng: random.Random) -> LoreEntry:
    hero = alien_name(rng)
    artifact = f"{ship_name(rng)} Crystal"
    location = planet_name(rng)
    content = random_choice(rng, LEGEND_TEMPLATES).format(
        hero=hero, artifact=artifact, location=location, ability=random_choice(rng, ABILITIES)
    )
    return LoreEntry(
        title=f"The Legend of {hero}",
        type=LoreType.LEGEND,
        content=content,
        era=LEGENDARY_ERA,
        significance=Significance.LEGENDARY,
        related_entities=[hero, artifact, location],
        tags=["mythology", "heroes", "artifacts", "legends"],
    )


def _location_lore(rng: random.Random) -> LoreEntry:
    location = planet_name(rng)
    species = alien_name(rng)
    content = random_choice(rng, LOCATION_TEMPLATES).format(
        location=location, species=species, technology=random_choice(rng, TECHNOLOGIES)
    )
    return LoreEntry(
        title=location,
        type=LoreType.LOCATION,
        content=content,
        era=CURRENT_ERA,
        significance=random_significance(rng),
        related_entities=[location, species],
        tags=["locations", "worlds", "phenomena", "mysteries"],
    )


def _event_lore(rng: random.Random) -> LoreEntry:
    event = f"The {station_name(rng)} Convergence"
    species = alien_name(rng)
    era = random_choice(rng, ERAS)
    technology = random_choice(rng, TECHNOLOGIES)
    content = random_choice(rng, EVENT_TEMPLATES).format(
        event=event, era=era, species=species, technology=technology
    )
    return LoreEntry(
        title=event,
        type=LoreType.EVENT,
        content=content,
        era=era,
        significance=Significance.CRITICAL,
        related_entities=[event, species, technology],
        tags=["major events", "galactic history", "consequences"],
    )


_BUILDERS = {
    LoreType.SPECIES: _species_lore,
    LoreType.TECHNOLOGY: _technology_lore,
    LoreType.HISTORY: _history_lore,
    LoreType.LEGEND: _legend_lore,
    LoreType.LOCATION: _location_lore,
    LoreType.EVENT: _event_lore,
}


def generate_lore(rng: random.Random, lore_type: str | None = None) -> LoreEntry:
    """One lore entry of ``lore_type``; unknown or missing types pick one at random."""
    try:
        kind = LoreType(lore_type) if lore_type else random_choice(rng, tuple(LoreType))
    except ValueError:
        kind = random_choice(rng, tuple(LoreType))
    return _BUILDERS[kind](rng)


def generate_codex(rng: random.Random, entries: int = 10) -> list[LoreEntry]:
    """``entries`` lore entries cycling through every type, most significant first."""
    types = tuple(LoreType)
    codex = [generate_lore(rng, types[index % len(types)]) for index in range(entries)]
    return sorted(codex, key=lambda entry: SIGNIFICANCE_ORDER[entry.significance])


def generate_quest_lore(quest_type: str, location: str) -> LoreEntry:
    """Mission briefing for a quest in ``location``."""
    return LoreEntry(
        title=f"Mission Briefing: {quest_type}",
        type=LoreType.HISTORY,
        content=(
            f"Intelligence reports indicate unusual activity in the {location} sector. This "
            "mission requires careful analysis of local conditions and historical context to "
            "ensure success."
        ),
        era=CURRENT_ERA,
        significance=Significance.MINOR,
        related_entities=[location, quest_type],
        tags=["mission", "current events", "briefing"],
    )
