"""
Per-particle association bookkeeping for reporting and debugging.

These helpers carry no numerical meaning for the filter. They attach
association lists to a particle and render them as space-separated text,
e.g. for a host application that displays the best particle's matches.
"""

from typing import Iterable, Sequence

from pfloc.localization.types import Particle


def set_associations(
    particle: Particle,
    associations: Sequence[int],
    sense_x: Sequence[float],
    sense_y: Sequence[float],
) -> Particle:
    """
    Overwrite a particle's associations and sensed map coordinates.

    Args:
        particle: Particle to modify in place.
        associations: Landmark id for each association.
        sense_x: Map-frame x of each association.
        sense_y: Map-frame y of each association.

    Returns:
        The same particle, for chaining.

    Raises:
        ValueError: If the three sequences differ in length.
    """
    if not (len(associations) == len(sense_x) == len(sense_y)):
        raise ValueError(
            f"associations, sense_x and sense_y must have equal length, got "
            f"{len(associations)}, {len(sense_x)}, {len(sense_y)}"
        )

    particle.associations = [int(a) for a in associations]
    particle.sense_x = [float(v) for v in sense_x]
    particle.sense_y = [float(v) for v in sense_y]
    return particle


def _join(values: Iterable[str]) -> str:
    return " ".join(values)


def get_associations(particle: Particle) -> str:
    """
    Render associated landmark ids, e.g. ``"1 4 7"``.

    Example:
        >>> p = Particle(id=0, x=0.0, y=0.0, theta=0.0, associations=[1, 4, 7])
        >>> get_associations(p)
        '1 4 7'
    """
    return _join(str(a) for a in particle.associations)


def get_sense_x(particle: Particle) -> str:
    """Render sensed x coordinates with shortest ``%g`` formatting."""
    return _join(f"{v:g}" for v in particle.sense_x)


def get_sense_y(particle: Particle) -> str:
    """Render sensed y coordinates with shortest ``%g`` formatting."""
    return _join(f"{v:g}" for v in particle.sense_y)
