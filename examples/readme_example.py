"""Basic doublebuffer usage example.

Demonstrates:
- Reading the current state while writing the next one
- Switching at the frame boundary
- The borrow conflict raised when a borrow outlives its frame
"""

from doublebuffer import BorrowConflictError, BufferSettings, DoubleBuffer


def main() -> None:
    buffer = DoubleBuffer([2, 4, 6], [], settings=BufferSettings(track_origins=True))

    for frame in range(3):
        with buffer.current() as current, buffer.next_mut() as nxt:
            nxt.value = [number + 1 for number in current.value]
        buffer.switch()
        with buffer.current() as current:
            print(f"Frame {frame}: {current.value}")

    leaked = buffer.current()
    try:
        buffer.switch()
    except BorrowConflictError as e:
        print(f"Switch refused:\n{e}")
    finally:
        leaked.release()


if __name__ == "__main__":
    main()
