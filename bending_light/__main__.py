"""
__main__.py - Print the dispersion table for the reference substances

Usage: python -m bending_light

Project: Bending Light Optics Core
"""

from .dispersion import dispersion_table
from .media import AIR, WATER, GLASS, DIAMOND


def main() -> None:
    substances = [AIR, WATER, GLASS, DIAMOND]
    for state in substances:
        print(f"{state.name} -> {state.index_of_refraction_for_red_light():.6f}")
    print()

    lambdas, values = dispersion_table(substances)
    print("Wavelength\t" + "\t".join(state.name for state in substances))
    for lam, row in zip(lambdas, values):
        print(f"{lam * 1e9:.1f} nm\t" + "\t".join(f"{n:.6f}" for n in row))


if __name__ == "__main__":
    main()
