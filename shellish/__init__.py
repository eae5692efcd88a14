#!/usr/bin/env python3

"A small, declarative command-line argument parser and dispatcher."
__version__ = "1.0.0"


# please leave this copyright notice in binary distributions.
license = """
shellish/__init__.py
part of the Shellish software package
Copyright 2025 by the Shellish authors
All rights reserved.

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included
in all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE
OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""


import asyncio
import big.all as big
import builtins
import inspect
import os.path
from os.path import basename
import sys
import types

from . import text


# "no default value."  None is a perfectly good default,
# so we need something else to mean "the user didn't specify one".
empty = inspect.Parameter.empty


##
## exceptions
##

class ShellishBaseException(Exception):
    pass

class ConfigurationError(ShellishBaseException):
    """
    Raised when the Shellish API is used improperly.
    """
    pass

class DuplicateLongName(ConfigurationError):
    def __init__(self, long_name):
        self.long_name = long_name
        super().__init__(f"Argument with long name '{long_name}' already exists")

class DuplicateShortName(ConfigurationError):
    def __init__(self, short_name):
        self.short_name = short_name
        super().__init__(f"Argument with short name '{short_name}' already exists")


class UsageError(ShellishBaseException):
    """
    Raised when Shellish processes an invalid command-line.

    You won't see these escape from parse(); the Processor
    catches them and hands you back a failed ParseResult.
    """
    pass

class UnknownArgument(UsageError):
    def __init__(self, token):
        self.token = token
        super().__init__(f"Unknown argument: {token}")

class InsufficientValues(UsageError):
    """
    An argument didn't get as many values as it takes.

    "found" is the flag-like token that got in the way,
    or None if we simply ran out of command-line.
    """
    def __init__(self, long_name, required, available, found=None):
        self.long_name = long_name
        self.required = required
        self.available = available
        self.found = found
        if found is None:
            why = f"only {available} provided"
        elif not found:
            why = "found end of arguments"
        else:
            why = f"found flag {found}"
        super().__init__(f"Argument --{long_name} requires {required} value(s), but {why}")

class MissingRequiredArgument(UsageError):
    def __init__(self, long_name):
        self.long_name = long_name
        super().__init__(f"Required argument --{long_name} is missing")

class CallbackFailure(UsageError):
    def __init__(self, long_name, exception):
        self.long_name = long_name
        self.exception = exception
        message = str(exception) or exception.__class__.__name__
        super().__init__(f"Error executing callback for --{long_name}: {message}")

class InternalError(UsageError):
    pass


class ParseStop(ShellishBaseException):
    """
    Raised by a callback to stop parsing early, successfully.
    The help and version callbacks use these.
    """
    pass

class HelpRequested(ParseStop):
    pass

class VersionRequested(ParseStop):
    pass


##
## argument definitions
##

def _check_name(kind, name):
    if not (isinstance(name, str) and name):
        raise ConfigurationError(f"{kind} name must be a non-empty str, not {name!r}")
    if name.startswith("-"):
        raise ConfigurationError(f"{kind} name {name!r} must not start with a dash")


class ArgumentDefinition:
    """
    Everything Shellish knows about one argument.

    "args" is the arity:
         0  the argument is a flag, it takes no values.
         N  the argument takes exactly N values.
        -1  the argument takes every value up to the
            next flag-like token (or the end of the command-line).

    Definitions are read-only once created.
    """

    __slots__ = ('_long_name', '_short_name', '_description', '_args', '_required', '_default', '_callback')

    def __init__(self, long_name, short_name=None, description="", *, args=0, required=False, default=empty, callback):
        _check_name("long", long_name)
        if short_name is not None:
            _check_name("short", short_name)
        # bool is a subclass of int.  args=True is almost certainly a mistake.
        if isinstance(args, bool) or not isinstance(args, int):
            raise ConfigurationError(f"--{long_name}: args must be an int, not {args!r}")
        if args < -1:
            raise ConfigurationError(f"--{long_name}: args must be -1, 0, or a positive int, not {args}")
        if not builtins.callable(callback):
            raise ConfigurationError(f"--{long_name}: callback {callback!r} is not callable")

        self._long_name = long_name
        self._short_name = short_name
        self._description = description or ""
        self._args = args
        self._required = bool(required)
        self._default = default
        self._callback = callback

    long_name = property(lambda self: self._long_name)
    short_name = property(lambda self: self._short_name)
    description = property(lambda self: self._description)
    args = property(lambda self: self._args)
    required = property(lambda self: self._required)
    default = property(lambda self: self._default)
    callback = property(lambda self: self._callback)

    @property
    def has_default(self):
        return self._default is not empty

    @property
    def unbounded(self):
        return self._args == -1

    def __repr__(self):
        short = f" -{self._short_name}" if self._short_name else ""
        return f"<{self.__class__.__name__} --{self._long_name}{short} args={self._args} required={self._required}>"


class ArgumentRegistry:
    """
    Ordered mapping of long name -> ArgumentDefinition,
    plus a short name -> long name lookup.

    Names are unique, and there's no way to remove or
    replace a definition once it's registered.
    """

    def __init__(self):
        self._definitions = {}
        self._short_to_long = {}

    def register(self, definition):
        long_name = definition.long_name
        short_name = definition.short_name
        # check both before storing either,
        # so a failed registration changes nothing.
        if long_name in self._definitions:
            raise DuplicateLongName(long_name)
        if short_name and (short_name in self._short_to_long):
            raise DuplicateShortName(short_name)
        if short_name:
            self._short_to_long[short_name] = long_name
        self._definitions[long_name] = definition
        return definition

    def by_long_name(self, long_name):
        # raises KeyError if not found
        return self._definitions[long_name]

    def long_name_for(self, short_name):
        return self._short_to_long[short_name]

    def by_short_name(self, short_name):
        return self._definitions[self._short_to_long[short_name]]

    def __contains__(self, long_name):
        return long_name in self._definitions

    def __iter__(self):
        return iter(self._definitions.values())

    def __len__(self):
        return len(self._definitions)

    def __repr__(self):
        names = " ".join(f"--{name}" for name in self._definitions)
        return f"<{self.__class__.__name__} {names}>"


##
## arity resolution
##

def resolve_values(definition, tokens, start):
    """
    Collects the values for "definition" from "tokens",
    starting at index "start".

    Returns a tuple (values, next_index), where values is
    a list of str, and next_index is the index of the first
    token we didn't consume.

    A token that starts with a dash is never a value.
    (Yes, that means you can't pass -5 as a value.)

    Raises InsufficientValues if the definition takes a
    fixed number of values and there aren't enough.
    """
    arity = definition.args
    values = []
    i = start
    length = len(tokens)

    if arity == -1:
        while i < length:
            token = tokens[i]
            if (not token) or token.startswith("-"):
                break
            values.append(token)
            i += 1
        return values, i

    for count in range(arity):
        if i >= length:
            raise InsufficientValues(definition.long_name, arity, count)
        token = tokens[i]
        if (not token) or token.startswith("-"):
            raise InsufficientValues(definition.long_name, arity, count, token)
        values.append(token)
        i += 1
    return values, i


def normalize_values(definition, values):
    """
    Turns the list of values collected for an
    argument into what we record in parsed_arguments:

        flag (args=0)      True
        args=1             the value itself (a str)
        otherwise          the list of values
    """
    if definition.args == 0:
        return True
    if definition.args == 1:
        return values[0]
    return list(values)


def default_to_values(definition):
    """
    The inverse of normalize_values(), for default values.
    Only used when Shellish(default_callbacks=True).
    """
    default = definition.default
    if definition.args == 0:
        return []
    if definition.args == 1:
        return [default]
    if isinstance(default, (list, tuple)):
        return list(default)
    return [default]


##
## per-parse state
##

class ParseContext:
    """
    Passed to every callback during a parse.

    command
        The display name of the program.
    all_args
        Every token on the command-line, as a tuple.
    remaining_args
        The tokens after the ones consumed so far, as a tuple.
        While a callback runs, that's everything after the
        callback's own values.
    parsed_arguments
        A read-only mapping of long name -> value, for
        every argument processed so far (including the
        one whose callback is running).
    """

    def __init__(self, command, tokens):
        self.command = command
        self.all_args = tuple(tokens)
        self._cursor = 0
        self._parsed = {}
        self.parsed_arguments = types.MappingProxyType(self._parsed)

    @property
    def remaining_args(self):
        return self.all_args[self._cursor:]

    def _advance(self, cursor):
        self._cursor = cursor

    def _record(self, long_name, value):
        self._parsed[long_name] = value

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.command!r} parsed={dict(self._parsed)!r} remaining={list(self.remaining_args)!r}>"


class ParseResult:
    """
    What you get back from parse().

    success
        True if the command-line was processed successfully.
        Asking for help or the version counts as success.
    error
        The error message if the parse failed, otherwise None.
    exception
        The UsageError that stopped the parse, otherwise None.
    help_requested, version_requested
        True if --help (or --version) stopped the parse.
    arguments
        A dict of everything recorded before the parse stopped.
    """

    __slots__ = ('_success', '_error', '_exception', '_help_requested', '_version_requested', '_arguments')

    def __init__(self, success, *, exception=None, help_requested=False, version_requested=False, arguments=None):
        self._success = success
        self._exception = exception
        self._error = str(exception) if exception is not None else None
        self._help_requested = help_requested
        self._version_requested = version_requested
        self._arguments = dict(arguments or {})

    success = property(lambda self: self._success)
    error = property(lambda self: self._error)
    exception = property(lambda self: self._exception)
    help_requested = property(lambda self: self._help_requested)
    version_requested = property(lambda self: self._version_requested)

    @property
    def arguments(self):
        # a copy, so nobody can change our result after the fact.
        return dict(self._arguments)

    def __bool__(self):
        return self._success

    def __repr__(self):
        if not self._success:
            return f"<{self.__class__.__name__} failed error={self._error!r}>"
        extra = ""
        if self._help_requested:
            extra = " help_requested"
        elif self._version_requested:
            extra = " version_requested"
        return f"<{self.__class__.__name__} success{extra} arguments={self._arguments!r}>"


##
## the main event
##

class Shellish:
    """
    A Shellish object represents one command-line program.

    Register arguments with add_argument() (or the argument()
    decorator), then call main(), process(), or parse().
    """

    def __init__(self,
        name=None,
        description="",
        *,
        version=None,
        author=None,
        help_text=None,

        usage_max_columns = 80,

        # if true, required arguments filled in from their
        # default value also have their callback called,
        # with the default value as their value.
        default_callbacks = False,

        log_events = True,
        ):
        self.name = name or basename(sys.argv[0])
        self.description = description or ""
        self.support_version = version
        self.author = author
        self.help_text = help_text
        self.usage_max_columns = usage_max_columns
        self.default_callbacks = default_callbacks
        self.log_events = log_events

        self.registry = ArgumentRegistry()

        self.add_argument('help', 'h', 'Show help information', callback=self._help_callback)

        if version:
            self.add_argument('version', 'v', 'Show version information', callback=self._version_callback)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name!r} arguments={len(self.registry)}>"

    def add_argument(self, long_name, short_name=None, description="", *, args=0, required=False, default=empty, callback):
        """
        Registers a new argument.  Returns self, so you can chain calls.

        Raises DuplicateLongName or DuplicateShortName if either
        name is already taken (including "help", "h", and, if
        you specified a version, "version" and "v").
        """
        definition = ArgumentDefinition(long_name, short_name, description,
            args=args, required=required, default=default, callback=callback)
        self.registry.register(definition)
        return self

    def argument(self, long_name, short_name=None, description="", *, args=0, required=False, default=empty):
        """
        Decorator version of add_argument().
        The decorated function becomes the callback.

            @cli.argument("output", "o", "Where to write", args=1)
            def output(values, context):
                ...
        """
        def argument(callback):
            self.add_argument(long_name, short_name, description,
                args=args, required=required, default=default, callback=callback)
            return callback
        return argument

    ##
    ## help and version
    ##

    def render_help(self):
        """
        Returns the help text for this program as a str.
        Reflects every argument registered so far.
        """
        lines = []
        append = lines.append

        if self.description:
            append(f"{self.name} - {self.description}")
        else:
            append(self.name)
        if self.support_version:
            append(f"Version: {self.support_version}")
        if self.author:
            append(f"Author: {self.author}")
        append("")
        append("Usage:")
        append(f"  {self.name} [options]")
        append("")
        append("Options:")

        definitions = list(self.registry)
        longest_long = max(len(d.long_name) for d in definitions)
        short_names = [d.short_name for d in definitions if d.short_name]
        # "-x, " is four characters.
        short_width = max([len(s) + 3 for s in short_names] + [4])

        try:
            columns, rows = os.get_terminal_size()
        except OSError:
            rows = 25
            columns = 80
        columns = min(columns, self.usage_max_columns)

        for d in definitions:
            if d.short_name:
                short_flag = f"-{d.short_name}, ".ljust(short_width)
            else:
                short_flag = " " * short_width
            long_flag = f"--{d.long_name}".ljust(longest_long + 2)
            if d.unbounded:
                indicator = " <values...>"
            elif d.args == 1:
                indicator = " <value>"
            elif d.args > 1:
                indicator = f" <{d.args} values>"
            else:
                indicator = ""
            required = " (required)" if d.required else ""

            prefix = f"  {short_flag}{long_flag}{indicator.ljust(15)} "
            description = f"{d.description}{required}"
            # don't let the description column get silly-narrow.
            margin = max(columns - len(prefix), 20)
            wrapped = text.wrap_words(description.split(), margin)
            append(text.hang(prefix, wrapped))

        if self.help_text:
            append("")
            append(self.help_text)

        return "\n".join(lines)

    def help(self):
        """
        Prints the help text for this program.
        """
        print(self.render_help())

    def version(self):
        print(f"{self.name} v{self.support_version}")

    def _help_callback(self, values, context):
        self.help()
        raise HelpRequested()

    def _version_callback(self, values, context):
        self.version()
        raise VersionRequested()

    ##
    ## processing
    ##

    def processor(self):
        return Processor(self)

    async def parse(self, tokens=None):
        """
        Parses "tokens" (default: sys.argv[1:]), calling
        the callback for every argument found.

        Returns a ParseResult.  Never raises UsageError.
        """
        if tokens is None:
            tokens = sys.argv[1:]
        processor = self.processor()
        return await processor(tokens)

    def process(self, tokens=None):
        """
        Synchronous version of parse().
        Don't call this from inside a running event loop.
        """
        return asyncio.run(self.parse(tokens))

    def main(self, args=None):
        """
        Parses the command-line and exits the process:
        with 0 on success, 1 on failure.
        """
        if args is None:
            args = sys.argv[1:]
        processor = self.processor()
        processor.main(args)


class Processor:
    """
    Parses a single command-line for a Shellish object.

    A new Processor is created for every parse, so all the
    per-parse state (the context, the event log) lives here.
    """

    def __init__(self, shellish):
        self.shellish = shellish
        self.registry = shellish.registry
        self.reset()

    def reset(self):
        self.context = None
        self.result = None
        self.log = big.Log()

    def _log(self, event):
        if self.shellish.log_events:
            self.log(event)

    def lookup(self, token):
        """
        Maps a flag-like token ("--name" or "-n") to its
        ArgumentDefinition.  Returns None for a token that
        isn't flag-like at all.
        """
        if token.startswith("--"):
            try:
                return self.registry.by_long_name(token[2:])
            except KeyError:
                raise UnknownArgument(token) from None

        if token.startswith("-") and (len(token) > 1):
            try:
                long_name = self.registry.long_name_for(token[1:])
            except KeyError:
                raise UnknownArgument(token) from None
            try:
                return self.registry.by_long_name(long_name)
            except KeyError:
                raise InternalError(f"Internal error: argument definition not found for {long_name}") from None

        return None

    async def invoke(self, definition, values):
        context = self.context
        try:
            result = definition.callback(values, context)
            if inspect.isawaitable(result):
                await result
        except ParseStop:
            raise
        except Exception as e:
            raise CallbackFailure(definition.long_name, e) from e

    async def dispatch(self, tokens):
        context = self.context
        i = 0
        length = len(tokens)

        while i < length:
            token = tokens[i]
            if not token:
                i += 1
                context._advance(i)
                continue

            definition = self.lookup(token)
            if definition is None:
                # positional arguments aren't supported.  skip it.
                i += 1
                context._advance(i)
                continue

            values, i = resolve_values(definition, tokens, i + 1)
            context._record(definition.long_name, normalize_values(definition, values))
            context._advance(i)

            self._log(f"{token} {values!r}")
            await self.invoke(definition, values)

    async def fill_defaults(self):
        context = self.context
        default_callbacks = self.shellish.default_callbacks
        for definition in self.registry:
            if (not definition.required) or (definition.long_name in context.parsed_arguments):
                continue
            if not definition.has_default:
                raise MissingRequiredArgument(definition.long_name)
            self._log(f"--{definition.long_name} default {definition.default!r}")
            context._record(definition.long_name, definition.default)
            if default_callbacks:
                await self.invoke(definition, default_to_values(definition))

    async def __call__(self, tokens):
        self.reset()
        tokens = list(tokens)
        self.context = ParseContext(self.shellish.name, tokens)
        self._log("parse start")
        if self.shellish.log_events:
            self.log.enter("dispatch")

        try:
            try:
                await self.dispatch(tokens)
            finally:
                if self.shellish.log_events:
                    self.log.exit()
            await self.fill_defaults()
            result = ParseResult(True, arguments=self.context.parsed_arguments)
        except HelpRequested:
            result = ParseResult(True, help_requested=True, arguments=self.context.parsed_arguments)
        except VersionRequested:
            result = ParseResult(True, version_requested=True, arguments=self.context.parsed_arguments)
        except ParseStop:
            result = ParseResult(True, arguments=self.context.parsed_arguments)
        except UsageError as e:
            self._log(f"error: {e}")
            result = ParseResult(False, exception=e, arguments=self.context.parsed_arguments)

        self.result = result
        self._log("parse complete")
        return result

    def main(self, args):
        result = asyncio.run(self(args))
        if not result.success:
            print(f"Error: {result.error}", file=sys.stderr)
            print("\nUse --help for usage information.")
            sys.exit(1)
        sys.exit(0)
