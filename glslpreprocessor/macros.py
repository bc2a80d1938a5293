import logging

from glslpreprocessor import exceptions
from glslpreprocessor.config import MAX_DEFINES
from glslpreprocessor.tokens import TokenType, tokenize

logger = logging.getLogger(__name__)


class Macro:
    __slots__ = ["name", "body", "params", "function_like"]

    def __init__(self, name, body="", params=None):
        self.name = name
        self.body = body
        self.function_like = params is not None
        self.params = tuple(params) if params is not None else ()

    def substitute(self, args):
        """Return the body with each parameter replaced by its argument."""
        if not self.params:
            return self.body
        replacements = dict(zip(self.params, args))
        return "".join(
            replacements.get(token.value, token.value)
            if token.type is TokenType.IDENTIFIER else token.value
            for token in tokenize(self.body)
        )

    def __eq__(self, other):
        if not isinstance(other, Macro):
            return NotImplemented
        return ((self.name, self.body, self.params, self.function_like) ==
                (other.name, other.body, other.params, other.function_like))

    def __repr__(self):
        if self.function_like:
            return f"Macro({self.name}({', '.join(self.params)}) {self.body!r})"
        return f"Macro({self.name} {self.body!r})"


class Defines:
    """Macro table for a single preprocessing run."""

    def __init__(self, max_defines=MAX_DEFINES, predefined=None):
        self.max_defines = max_defines
        self.defines = {}
        for name, body in (predefined or {}).items():
            self.define(name, "" if body is None else str(body))

    def define(self, name, body="", params=None):
        if name not in self.defines and len(self.defines) >= self.max_defines:
            raise exceptions.DirectiveSyntaxError("Too many defines")
        logger.debug("Defining %s=%s", name, body)
        macro = Macro(name, body, params)
        self.defines[name] = macro
        return macro

    def undefine(self, name):
        if self.defines.pop(name, None) is not None:
            logger.debug("Undefining %s", name)

    def get(self, name, default=None):
        return self.defines.get(name, default)

    def __contains__(self, name):
        return name in self.defines

    def __getitem__(self, name):
        return self.defines[name]

    def __len__(self):
        return len(self.defines)

    def __iter__(self):
        return iter(self.defines.values())


class MacroExpander:
    """
    Single pass identifier substitution over one line of text.

    Replacement text is emitted as is and never rescanned, so a macro
    whose body mentions another macro (or itself) is not expanded
    further. Arguments of function-like macros are expanded before
    they are substituted into the body.
    """

    def __init__(self, defines):
        self.defines = defines

    def expand(self, text):
        tokens = tokenize(text)
        out = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            macro = None
            if token.type is TokenType.IDENTIFIER:
                macro = self.defines.get(token.value)
            if macro is None:
                out.append(token.value)
                i += 1
            elif not macro.function_like:
                out.append(macro.body)
                i += 1
            else:
                i = self._expand_call(macro, tokens, i, out)
        return "".join(out)

    def _expand_call(self, macro, tokens, start, out):
        i = start + 1
        while i < len(tokens) and tokens[i].whitespace:
            i += 1
        if i == len(tokens) or tokens[i].value != "(":
            # Name of a function-like macro without a call stays as is
            out.append(tokens[start].value)
            return start + 1
        args, end = self._collect_args(macro, tokens, i)
        if not macro.params and args == [""]:
            args = []
        if len(args) != len(macro.params):
            raise exceptions.DirectiveSyntaxError(
                f"Macro {macro.name} expects {len(macro.params)} "
                f"argument(s), got {len(args)}"
            )
        out.append(macro.substitute([self.expand(arg) for arg in args]))
        return end + 1

    def _collect_args(self, macro, tokens, open_paren):
        args = []
        current = []
        depth = 0
        for i in range(open_paren + 1, len(tokens)):
            value = tokens[i].value
            if value == "(":
                depth += 1
            elif value == ")":
                if depth == 0:
                    args.append("".join(current).strip())
                    return args, i
                depth -= 1
            elif value == "," and depth == 0:
                args.append("".join(current).strip())
                current = []
                continue
            current.append(value)
        raise exceptions.DirectiveSyntaxError(
            f"Unterminated invocation of macro {macro.name}"
        )
