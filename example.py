#!/usr/bin/env python3
"""
Example usage of the sparselife package.
"""

from sparselife import LifeGrid, PatternLibrary, Simulation
from sparselife.frontends import TextRenderer


def main():
    """Demonstrate programmatic usage of the sparselife package."""
    simulation = Simulation(LifeGrid())
    renderer = TextRenderer()

    # Load a pattern, centred on the origin
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        simulation.load_pattern(glider)

        print("Initial state:")
        print(renderer.render(simulation.grid))
        print(f"Population: {simulation.population}")
        print()

        # The grid is unbounded, so the glider never hits an edge
        for _ in range(8):
            simulation.tick()
            print(f"Generation {simulation.generation}:")
            print(renderer.render(simulation.grid))
            print(f"Population: {simulation.population}, born {len(renderer.born)}, died {len(renderer.died)}")
            print()

    stats = simulation.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
