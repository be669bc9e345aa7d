from errors import TapeUnderflowError


class Tape:
    """Cells of unsigned bytes that only grow to the right.

    Starts as a single zero cell with the pointer on it. Moving right off the
    end appends a fresh zero cell, moving left off the start is an error."""

    def __init__(self):
        self.cells = [0]
        self.pointer = 0

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f'{type(self).__name__}(cells={self.cells!r}, pointer={self.pointer})'

    def increment(self):
        self.cells[self.pointer] = (self.cells[self.pointer] + 1) % 256

    def decrement(self):
        self.cells[self.pointer] = (self.cells[self.pointer] - 1) % 256

    def move_right(self):
        if self.pointer + 1 >= len(self.cells):
            self.cells.append(0)
        self.pointer += 1

    def move_left(self):
        """Raise `TapeUnderflowError` if the pointer is already on the first cell."""
        if self.pointer == 0:
            raise TapeUnderflowError
        self.pointer -= 1

    def read(self):
        return self.cells[self.pointer]

    def write(self, value):
        self.cells[self.pointer] = value % 256

    @property
    def current_cell(self):
        return self.read()
