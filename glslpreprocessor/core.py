import enum
import logging
import os.path

from glslpreprocessor import exceptions
from glslpreprocessor.config import Config, MAX_CONDITIONAL_DEPTH
from glslpreprocessor.filesystem import FileReader
from glslpreprocessor.macros import Defines, MacroExpander
from glslpreprocessor.output import ErrorReporter, OutputBuffer
from glslpreprocessor.result import Result
from glslpreprocessor.tokens import (BLANK, IDENTIFIER_RE, CommentStripper,
                                     split_lines, trim)
from glslpreprocessor import virtual_paths as virtual_paths_

logger = logging.getLogger(__name__)

DIRECTIVES = frozenset(["include", "define", "undef",
                        "ifdef", "ifndef", "else", "endif"])
CONDITIONAL_DIRECTIVES = frozenset(["ifdef", "ifndef", "else", "endif"])


class Tag(enum.Enum):
    IFDEF = "ifdef"
    IFNDEF = "ifndef"


class ConditionalFrame:
    __slots__ = ["tag", "name", "active", "taken", "seen_else",
                 "line_no", "filename"]

    def __init__(self, tag, name, active, line_no, filename):
        self.tag = tag
        self.name = name
        self.active = active
        self.taken = active
        self.seen_else = False
        self.line_no = line_no
        self.filename = filename

    def __repr__(self):
        return (f"#{self.tag.value} {self.name} "
                f"(active={self.active}, taken={self.taken})")


class Preprocessor:
    """
    State of one preprocessing run.

    Owns the macro table, the conditional stack, the output buffer and
    the error reporter; included files are processed into the same
    instance. Create a new Preprocessor for every run.
    """

    def __init__(self, config=None, virtual_paths=None, reader=None):
        self.config = config if config is not None else Config()
        if virtual_paths is None:
            virtual_paths = virtual_paths_.default_registry
        self.virtual_paths = virtual_paths
        self.reader = reader if reader is not None else FileReader()
        self.defines = Defines(self.config.max_defines, self.config.defines)
        self.expander = MacroExpander(self.defines)
        self.constraints = []
        self.output = OutputBuffer(self.config.max_output_size)
        self.errors = ErrorReporter()
        self.comments = CommentStripper()
        self.include_depth = 0

    @property
    def ignore(self):
        return not all(frame.active for frame in self.constraints)

    def preprocess(self, source, filename):
        logger.debug("Preprocessing %s", filename)
        try:
            self.process_source(source, filename)
            self.check_conditionals_closed()
        except exceptions.ParseError as e:
            diagnostic = self.errors.record(e)
            logger.debug("Preprocessing %s failed: %s", filename, diagnostic)
            return Result.failed(diagnostic)
        logger.debug("Finished %s, %d characters", filename, len(self.output))
        return Result.ok(self.output.getvalue())

    def process_source(self, source, filename):
        """
        Run every line of source through process_line.

        Block comment state does not cross file boundaries: a comment left
        open at the end of source is an error located at the line that
        opened it.
        """
        outer_in_block = self.comments.in_block
        self.comments.in_block = False
        comment_line = None
        for line_no, line in split_lines(source):
            openings = self.comments.openings
            try:
                self.process_line(line, line_no, filename)
            except exceptions.ParseError as e:
                e.locate(line_no, filename)
                raise
            if self.comments.in_block and self.comments.openings != openings:
                comment_line = line_no
        if self.comments.in_block:
            raise exceptions.DirectiveSyntaxError(
                "Unterminated comment", comment_line, filename
            )
        self.comments.in_block = outer_in_block

    def process_line(self, line, line_no, filename):
        if len(line) > self.config.max_line_length:
            raise exceptions.DirectiveSyntaxError("Line too long")
        if self.config.remove_comments:
            line = self.comments.strip(line)
        line = trim(line)
        if line.startswith("#"):
            self.process_directive(line, line_no, filename)
        elif not self.ignore:
            self.emit(self.expander.expand(line))

    def process_directive(self, line, line_no, filename):
        body = line[1:].lstrip(BLANK)
        match = IDENTIFIER_RE.match(body)
        name = match.group() if match else ""
        if self.ignore and name not in CONDITIONAL_DIRECTIVES:
            return
        if name not in DIRECTIVES:
            self.emit(line)
            return
        handler = getattr(self, f"process_{name}")
        handler(rest=body[match.end():].strip(BLANK), line_no=line_no,
                filename=filename)

    def emit(self, text):
        self.output.append(text + "\n")

    def process_define(self, rest, **kwargs):
        match = IDENTIFIER_RE.match(rest)
        if match is None:
            raise exceptions.DirectiveSyntaxError("Invalid define directive")
        name = match.group()
        tail = rest[match.end():]
        params = None
        if tail.startswith("("):
            close = tail.find(")")
            if close == -1:
                raise exceptions.DirectiveSyntaxError(
                    f"Unterminated parameter list in definition of {name}"
                )
            params = self.parse_params(name, tail[1:close])
            tail = tail[close + 1:]
        self.defines.define(name, tail.strip(BLANK), params)

    @staticmethod
    def parse_params(name, text):
        if not text.strip(BLANK):
            return []
        params = [param.strip(BLANK) for param in text.split(",")]
        for param in params:
            if IDENTIFIER_RE.fullmatch(param) is None:
                raise exceptions.DirectiveSyntaxError(
                    f"Invalid parameter {param!r} in definition of {name}"
                )
        if len(set(params)) != len(params):
            raise exceptions.DirectiveSyntaxError(
                f"Duplicate parameter in definition of {name}"
            )
        return params

    def process_undef(self, rest, **kwargs):
        match = IDENTIFIER_RE.match(rest)
        if match is not None:
            self.defines.undefine(match.group())

    def process_ifdef(self, rest, line_no, filename):
        self.push_conditional(Tag.IFDEF, rest, line_no, filename)

    def process_ifndef(self, rest, line_no, filename):
        self.push_conditional(Tag.IFNDEF, rest, line_no, filename)

    def push_conditional(self, tag, rest, line_no, filename):
        match = IDENTIFIER_RE.match(rest)
        if match is None:
            raise exceptions.DirectiveSyntaxError(
                f"Missing macro name in #{tag.value}"
            )
        if len(self.constraints) >= MAX_CONDITIONAL_DEPTH:
            raise exceptions.ConditionalError("Too many nested conditionals")
        name = match.group()
        defined = name in self.defines
        active = defined if tag is Tag.IFDEF else not defined
        self.constraints.append(
            ConditionalFrame(tag, name, active, line_no, filename)
        )

    def process_else(self, **kwargs):
        if not self.constraints:
            raise exceptions.ConditionalError(
                "#else without matching #ifdef/#ifndef"
            )
        frame = self.constraints[-1]
        if frame.seen_else:
            raise exceptions.ConditionalError(
                f"Duplicate #else for #{frame.tag.value} {frame.name}"
            )
        frame.active = not frame.taken
        frame.taken = True
        frame.seen_else = True

    def process_endif(self, **kwargs):
        if not self.constraints:
            raise exceptions.ConditionalError(
                "#endif without matching #ifdef/#ifndef"
            )
        self.constraints.pop()

    def check_conditionals_closed(self):
        if self.constraints:
            frame = self.constraints[-1]
            raise exceptions.ConditionalError(
                f"Unclosed conditional directive #{frame.tag.value} "
                f"{frame.name}",
                frame.line_no, frame.filename
            )

    def process_include(self, rest, line_no, filename):
        if self.include_depth >= self.config.max_include_depth:
            raise exceptions.LimitExceeded("Maximum include depth exceeded")
        header, angled = self.parse_include_name(rest)
        path = self.resolve_include(header, angled)
        source = self.reader.read(path)
        if source is None:
            raise exceptions.IncludeError(
                f"Failed to read include file: {path}"
            )
        logger.debug("Including %s from %s:%d", path, filename, line_no)
        if self.config.preserve_lines:
            self.output.append(f'#line 1 "{path}"\n')
        self.include_depth += 1
        try:
            self.process_source(source, path)
        finally:
            self.include_depth -= 1
        if self.config.preserve_lines:
            self.output.append(f'#line {line_no + 1} "{filename}"\n')

    @staticmethod
    def parse_include_name(rest):
        """Return (name, angled) for the text after ``#include``."""
        quote = rest.find('"')
        angle = rest.find("<")
        if quote != -1 and (angle == -1 or quote < angle):
            start, end_char, angled = quote + 1, '"', False
        elif angle != -1:
            start, end_char, angled = angle + 1, ">", True
        else:
            raise exceptions.DirectiveSyntaxError("Invalid include directive")
        end = rest.find(end_char, start)
        if end == -1:
            raise exceptions.DirectiveSyntaxError(
                f"Unterminated include filename, missing '{end_char}'"
            )
        header = rest[start:end]
        if not header:
            raise exceptions.DirectiveSyntaxError("Empty include filename")
        return header, angled

    def resolve_include(self, header, angled):
        if angled:
            resolved = self.virtual_paths.resolve(header)
            if resolved is not None:
                logger.debug("Resolved <%s> to %s", header, resolved)
                return resolved
        base_path = self.config.base_path
        if not base_path:
            return header
        # Absolute names stay under the base path
        return os.path.join(base_path, header.lstrip("/" + os.path.sep))
