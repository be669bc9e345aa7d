import io
import logging
from collections import deque

from errors import (BudgetExceededError,
                    TapeUnderflowError,
                    UnclosedLoopError,
                    UnopenedLoopError)
from tape import Tape

logger = logging.getLogger(__name__)

DEFAULT_MAX_OPERATIONS = 100_000


class BFInterpreter:
    """Brainfuck interpreter.

    One interpreter owns one `Tape` for its whole life, so memory and the
    operation count carry over between calls to `execute`."""

    def __init__(self, max_operations=DEFAULT_MAX_OPERATIONS):
        self.tape = Tape()
        self.instruction_count = 0
        self._max_operations = max_operations

        self.code = ''
        self.code_pointer = 0
        self.loop_stack = deque()
        self.last_loop_end = -1
        self.input_stream = None
        self.output_stream = None

        self.commands = {
            '[': self.open_loop,
            ']': self.close_loop,
            '>': self.increment_pointer,
            '<': self.decrement_pointer,
            '+': self.increment_cell,
            '-': self.decrement_cell,
            ',': self.accept_input,
            '.': self.add_output
        }

    @property
    def max_operations(self):
        return self._max_operations

    def set_max_operations(self, max_operations):
        """Change the operation ceiling and return the previous one."""
        previous = self._max_operations
        self._max_operations = max_operations
        logger.debug('Operation ceiling changed from %d to %d', previous, max_operations)
        return previous

    def execute(self, code, input_stream, output_stream):
        """Run `code` reading bytes from `input_stream` and writing bytes to
        `output_stream`. Return the number of operations executed.

        Any error aborts the run. Output already written and changes to the
        tape are kept."""
        self.code = code
        self.code_pointer = 0
        self.loop_stack = deque()
        self.last_loop_end = max((i for i, char in enumerate(code) if char == ']'), default=-1)
        self.input_stream = input_stream
        self.output_stream = output_stream

        start_count = self.instruction_count
        logger.debug('Executing %d characters, %d operations used of %d',
                     len(code), start_count, self._max_operations)

        while self.code_pointer < len(self.code):
            self.step()

        executed = self.instruction_count - start_count
        logger.debug('Execution finished after %d operations', executed)
        return executed

    def run(self, code, input_data=b''):
        """Execute `code` with `input_data` as input and return the output bytes."""
        output = io.BytesIO()
        self.execute(code, io.BytesIO(input_data), output)
        return output.getvalue()

    def step(self):
        """Count and carry out the character under `code_pointer`, then move on.
        Characters that aren't commands still use up an operation."""
        self.instruction_count += 1
        if self.instruction_count > self._max_operations:
            raise BudgetExceededError(self._max_operations, self.code_pointer)

        command = self.commands.get(self.current_instruction)
        if command is not None:
            command()
        self.code_pointer += 1

    def open_loop(self):
        if self.current_cell != 0:
            if self.code_pointer > self.last_loop_end:
                raise UnclosedLoopError(self.code_pointer)
            self.loop_stack.append(self.code_pointer)
            return

        # Stops at the first `]` whatever the nesting
        start = self.code_pointer
        while True:
            self.code_pointer += 1
            if self.code_pointer >= len(self.code):
                raise UnclosedLoopError(start)
            if self.current_instruction == ']':
                return

    def close_loop(self):
        if not self.loop_stack:
            raise UnopenedLoopError(self.code_pointer)

        start = self.loop_stack.pop()
        if self.current_cell != 0:
            # Land on the `[` so it is checked (and pushed) again
            self.code_pointer = start - 1

    def increment_pointer(self):
        self.tape.move_right()

    def decrement_pointer(self):
        try:
            self.tape.move_left()
        except TapeUnderflowError as error:
            error.location = self.code_pointer
            raise

    def increment_cell(self):
        self.tape.increment()

    def decrement_cell(self):
        self.tape.decrement()

    def accept_input(self):
        input_ = self.input_stream.read(1)
        if input_:
            self.tape.write(input_[0])

    def add_output(self):
        self.output_stream.write(bytes((self.current_cell,)))

    @property
    def current_cell(self):
        return self.tape.read()

    @property
    def current_instruction(self):
        return self.code[self.code_pointer]
