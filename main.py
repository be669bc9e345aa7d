"""Command line host for the interpreter.

Reads a framed program from stdin:

    <input count> <line count>
    <input bytes>$
    <program line 1>
    ...

runs it, writes whatever the program outputs followed by a newline, and
reports problems on stderr with a non-zero return code.
"""
import argparse
import io
import logging
import re
import sys

from errors import ErrorTypes, ProgramRuntimeError, ProgramSyntaxError
from interpreter import BFInterpreter, DEFAULT_MAX_OPERATIONS

logger = logging.getLogger(__name__)

HEADER = re.compile(rb'\s*(\d+)\s+(\d+)\s*')
WHITESPACE = re.compile(rb'\s*')
INPUT_DELIMITER = b'$'


class FramingError(Exception):
    """Error raised when stdin doesn't follow the expected layout."""


class Frame:
    """A parsed submission: the input bytes and the program lines.

    Attributes:
        input_data -- Bytes fed to `,`.
        lines -- Program lines with their terminators removed."""

    def __init__(self, input_data, lines):
        self.input_data = input_data
        self.lines = lines

    @property
    def program(self):
        """All lines joined together. Each byte becomes one character."""
        return ''.join(line.decode('latin-1') for line in self.lines)

    def locate(self, location):
        """Return the 1-based (line, char) of program index `location`."""
        for line_number, line in enumerate(self.lines, start=1):
            if location < len(line):
                return line_number, location + 1
            location -= len(line)
        raise IndexError('location is past the end of the program')


def parse_frame(data):
    """Split raw stdin `data` into a `Frame`. Raise `FramingError` if the
    counts in the header don't match what follows."""
    header = HEADER.match(data)
    if header is None:
        raise FramingError('Invalid header')
    input_count, line_count = map(int, header.groups())
    pos = header.end()

    end = data.find(INPUT_DELIMITER, pos)
    if end == -1:
        end = len(data)
    input_data = data[pos:end]
    if len(input_data) != input_count:
        raise FramingError(f'Invalid input, expected {input_count} characters, '
                           f'received {len(input_data)}')

    pos = WHITESPACE.match(data, min(end + 1, len(data))).end()
    lines = _split_lines(data[pos:])[:line_count]
    if len(lines) != line_count:
        raise FramingError(f'Expected {line_count} lines, received {len(lines)}')

    return Frame(input_data, lines)


def _split_lines(text):
    if not text:
        return []
    lines = text.split(b'\n')
    if text.endswith(b'\n'):
        lines.pop()
    return [line.rstrip(b'\r') for line in lines]


def describe_error(error, frame):
    """Turn an interpreter error into a one line message."""
    error_type = error.error
    if error_type is ErrorTypes.UNMATCHED_OPEN_PAREN:
        message = 'Unmatched opening bracket'
    elif error_type is ErrorTypes.UNMATCHED_CLOSE_PAREN:
        message = 'Unmatched closing bracket'
    elif error_type is ErrorTypes.INVALID_TAPE_CELL:
        message = 'Tape pointer moved left of the first cell'
    elif error_type is ErrorTypes.OPERATION_LIMIT:
        message = f'Operation limit of {error.limit} exceeded'
    else:
        raise error

    if error.location is None:
        return message
    line, char = frame.locate(error.location)
    return f'{message} at: line {line}, char {char}'


def init_logging(debug=False):
    """Send log records to stderr. Only critical records get through unless `debug`."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    root.setLevel(logging.DEBUG if debug else logging.CRITICAL)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)5s %(name)s: %(message)s'))
    root.addHandler(handler)


def build_parser():
    parser = argparse.ArgumentParser(description='Run a framed brainfuck program read from stdin.')
    parser.add_argument('--max-operations', type=int, default=DEFAULT_MAX_OPERATIONS,
                        help='Abort after this many operations (default: %(default)s).')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug information to stderr.')
    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None):
    """Run the host. Streams default to the binary stdin/stdout and text stderr.
    Return the process exit code."""
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin.buffer
    stdout = stdout if stdout is not None else sys.stdout.buffer
    stderr = stderr if stderr is not None else sys.stderr

    init_logging(debug=args.verbose)

    try:
        frame = parse_frame(stdin.read())
    except FramingError as error:
        logger.debug('Rejected input: %s', error)
        print(error, file=stderr)
        return 1

    interpreter = BFInterpreter(max_operations=args.max_operations)
    try:
        interpreter.execute(frame.program, io.BytesIO(frame.input_data), stdout)
    except (ProgramSyntaxError, ProgramRuntimeError) as error:
        logger.debug('Program failed: %r', error)
        stdout.flush()
        print(describe_error(error, frame), file=stderr)
        return 1

    stdout.write(b'\n')
    stdout.flush()
    return 0


if __name__ == '__main__':
    sys.exit(main())
