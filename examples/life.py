"""Conway's Game of Life on a small torus.

Each generation reads the previous grid from ``current`` and writes the new
grid into ``next`` in place, so no grid is allocated after startup.
"""

import argparse

from doublebuffer import DoubleBuffer

GLIDER = {(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)}


def make_grid(size: int, alive: set[tuple[int, int]]) -> list[list[bool]]:
    return [[(row, col) in alive for col in range(size)] for row in range(size)]


def live_neighbours(grid: list[list[bool]], row: int, col: int) -> int:
    size = len(grid)
    return sum(
        grid[(row + dr) % size][(col + dc) % size]
        for dr in (-1, 0, 1)
        for dc in (-1, 0, 1)
        if dr or dc
    )


def step(buffer: DoubleBuffer[list[list[bool]]]) -> None:
    with buffer.current() as current, buffer.next_mut() as nxt:
        grid = current.value
        for row, cells in enumerate(grid):
            for col, alive in enumerate(cells):
                n = live_neighbours(grid, row, col)
                nxt.value[row][col] = n == 3 or (alive and n == 2)
    buffer.switch()


def render(grid: list[list[bool]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--size", type=int, default=8)
    parser.add_argument("--generations", type=int, default=4)
    args = parser.parse_args()

    buffer = DoubleBuffer(make_grid(args.size, GLIDER), make_grid(args.size, set()))
    for _ in range(args.generations):
        step(buffer)
        with buffer.current() as current:
            print(f"Generation {buffer.generation}:\n{render(current.value)}\n")


if __name__ == "__main__":
    main()
