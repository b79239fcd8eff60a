"""Perceptual color distance.

Colors are converted sRGB -> linear RGB -> XYZ (D65) -> CIE Lab and
compared with the CIE76 Delta E (Euclidean distance in Lab). Conversions
are vectorised so a whole design x implementation distance matrix is
computed in one pass.
"""

import numpy as np

from ..tokens import ColorValue

# sRGB (D65) to XYZ
SRGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ]
)

# D65 reference white
D65_WHITE = np.array([0.95047, 1.0, 1.08883])

LAB_EPSILON = 216 / 24389
LAB_KAPPA = 24389 / 27

# Delta E units per unit of alpha difference
ALPHA_WEIGHT = 100.0


def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    """Undo sRGB gamma; input channels in 0-255."""
    c = np.asarray(rgb, dtype=float) / 255.0
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert an (..., 3) array of 0-255 sRGB channels to CIE Lab."""
    xyz = srgb_to_linear(rgb) @ SRGB_TO_XYZ.T
    xyz = xyz / D65_WHITE
    f = np.where(xyz > LAB_EPSILON, np.cbrt(xyz), (LAB_KAPPA * xyz + 16) / 116)
    lightness = 116 * f[..., 1] - 16
    a = 500 * (f[..., 0] - f[..., 1])
    b = 200 * (f[..., 1] - f[..., 2])
    return np.stack([lightness, a, b], axis=-1)


def color_to_lab(color: ColorValue) -> tuple[float, float, float]:
    """Lab coordinates of a single color."""
    lab = rgb_to_lab(np.array([color.r, color.g, color.b]))
    return (float(lab[0]), float(lab[1]), float(lab[2]))


def delta_e_matrix(
    design: list[ColorValue], implementation: list[ColorValue]
) -> np.ndarray:
    """Pairwise color distances, shape (len(design), len(implementation)).

    Opaque pairs get plain CIE76 Delta E; an alpha difference is added in
    quadrature at ``ALPHA_WEIGHT`` units per full alpha step.
    """
    if not design or not implementation:
        return np.zeros((len(design), len(implementation)))

    lab_design = rgb_to_lab(np.array([[c.r, c.g, c.b] for c in design]))
    lab_impl = rgb_to_lab(np.array([[c.r, c.g, c.b] for c in implementation]))
    delta_e = np.linalg.norm(lab_design[:, None, :] - lab_impl[None, :, :], axis=-1)

    alpha_design = np.array([c.a for c in design])
    alpha_impl = np.array([c.a for c in implementation])
    delta_alpha = (alpha_design[:, None] - alpha_impl[None, :]) * ALPHA_WEIGHT

    return np.sqrt(delta_e**2 + delta_alpha**2)


def color_distance(first: ColorValue, second: ColorValue) -> float:
    """Delta E between two colors (0.0 for identical colors)."""
    if first == second:
        return 0.0
    return float(delta_e_matrix([first], [second])[0, 0])


def color_confidence(distance: float, threshold: float) -> float:
    """Linear confidence: 1.0 at distance 0, 0.0 at the threshold and beyond."""
    if threshold <= 0:
        return 1.0 if distance == 0 else 0.0
    return max(0.0, (threshold - distance) / threshold)
