"""
Default thresholds and tolerance tiers.

Two kinds of values live here:
- Decomposition thresholds: the defaults of the keyword arguments accepted
  by the decompositions (singularity, symmetry, positivity).
- Verification tiers: the precision expected from each algorithm when
  its output is checked against an identity (A x = b, L L^T = A, ...).

Both are policy defaults validated on small, well-conditioned matrices.
They do not generalize to arbitrary sizes or condition numbers without
re-validation; pass explicit values for anything else.
"""

from dataclasses import dataclass


# Pivots with smaller absolute value make an LU decomposition singular
DEFAULT_SINGULARITY_THRESHOLD = 1e-11

# Maximum relative deviation between a_ij and a_ji
DEFAULT_RELATIVE_SYMMETRY_THRESHOLD = 1e-15

# Smallest admissible running diagonal term in Cholesky / UD
DEFAULT_ABSOLUTE_POSITIVITY_THRESHOLD = 1e-10


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


SOLVE_RESIDUAL = ToleranceTier(
    rtol=1e-13,
    atol=0.0,
    name='solve_residual',
    description='||A x - b|| / ||b|| after an LU solve',
)

CHOLESKY_RECONSTRUCTION = ToleranceTier(
    rtol=0.0,
    atol=1e-15,
    name='cholesky_reconstruction',
    description='||L L^T - A|| for small well-scaled SPD matrices',
)

ORTHOGONALITY = ToleranceTier(
    rtol=0.0,
    atol=1e-14,
    name='orthogonality',
    description='||P^T P - I|| for a Householder transform',
)

HESSENBERG_RECONSTRUCTION = ToleranceTier(
    rtol=0.0,
    atol=1e-10,
    name='hessenberg_reconstruction',
    description='||P H P^T - A|| including accumulated rounding',
)

HESSENBERG_PRESERVATION = ToleranceTier(
    rtol=0.0,
    atol=1e-12,
    name='hessenberg_preservation',
    description='entries of A below the first sub-diagonal after reconstruction',
)

HESSENBERG_ZERO = ToleranceTier(
    rtol=0.0,
    atol=1e-16,
    name='hessenberg_zero',
    description='entries of H below the first sub-diagonal',
)

DETERMINANT = ToleranceTier(
    rtol=0.0,
    atol=1e-15,
    name='determinant',
    description='determinant of small integer matrices',
)

_TIERS = {
    tier.name: tier
    for tier in (
        SOLVE_RESIDUAL,
        CHOLESKY_RECONSTRUCTION,
        ORTHOGONALITY,
        HESSENBERG_RECONSTRUCTION,
        HESSENBERG_PRESERVATION,
        HESSENBERG_ZERO,
        DETERMINANT,
    )
}


def select_tolerance(name: str) -> ToleranceTier:
    """Look up a verification tier by name."""
    try:
        return _TIERS[name]
    except KeyError:
        raise ValueError(
            f"unknown tolerance tier {name!r}, expected one of {sorted(_TIERS)}"
        ) from None
