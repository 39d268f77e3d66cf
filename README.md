# quillasm

Building blocks for an assembler for a small 14-bit teaching machine:

- macro expansion of the source text,
- a first pass that collects labels and data and reports line errors,
- encoding of single machine words and their text rendering.

The library works on text in memory. It reads and writes no files.

## Installation

```
pip install .
```

## Macro expansion

`quillasm.macros.expand_macros(text)` finds blocks that run from `mcr NAME`
to `endmcr`. It removes them from the text and replaces each later use of
`NAME` with the body of the block. It returns an `ExpansionResult` with these
fields:

- `text`: the expanded source,
- `macros`: a tuple of `Macro(name, body)`,
- `errors`: messages such as `Error line 3: name of macro not valid.`

A macro cannot be named after an instruction (`mov`, `stop`, ...) or a
register (`r0` to `r7`). To check a name, use `is_valid_macro_name(name)`.

## First pass

```python
from quillasm.first_pass import first_pass

result = first_pass("""\
MAIN: mov r3, r5
      stop
STR: .string "ab"
""")

result.ok                      # True when no line had an error
result.symbols.find("STR")     # Label(name='STR', external=False, is_data=True, line=...)
result.instruction_count       # next free instruction address; code starts at 100
result.data_count              # number of data words
result.data                    # tuple of DataBlock
result.errors                  # tuple of LineError(line, kind)
```

The first pass does the following:

- It records labels declared on `.data`, `.string` and instruction lines.
- It declares `.extern` labels.
- It counts the words each instruction takes.
- After every line has been read, it moves data labels past the code.

`parse_string_operand` and `parse_data_operand` parse the text that follows a
directive and return a `DataBlock`. A string block ends with a zero word.

The `FirstPass` class shows each step on its own. It has `run(lines)`,
`handle_string`, `handle_data`, `handle_extern` and
`handle_instruction(line, opcode)`.

`quillasm.labels.SymbolTable` supports `find`, `add`, `in`, iteration and
`len`.

## Line checks

`quillasm.syntax` holds the lexical checks one at a time:

- `is_comment_or_empty`
- `check_label_name(name, char_after)`, which returns a `LabelCheck`
- `parse_int`, which returns `None` when the text is not a number
- `is_in_range`
- `find_opcode`, which returns an `Opcode` or `None`
- `is_register`
- `first_operand_is_register`
- `second_operand_is_register`
- `no_text_before_opcode`

## Word encoding

`quillasm.encoding` builds 14-bit words as integers:

- `command_word(source_mode, dest_mode, opcode)`
- `with_parameter_addressing(word, first, second)`
- `register_word(first, second)`
- `number_word(num)`
- `data_word(num)`
- `label_word(address, external)`

`render_word(word)` prints a word most significant bit first, with `/` for 1
and `.` for 0.

`operand_type`, `addressing_for` and `register_number` classify operands.
`OperandType` and `Addressing` name the operand kinds and addressing modes.

## Errors

`quillasm.errors.ErrorKind` lists every error kind:

- `describe(kind)` gives the message for one kind.
- `format_error(line, kind)` gives the full report line, for example
  `ERROR: line 7 : label already exists.`
- `str(LineError(...))` gives the same report line.

## What this package does not do

There is no command-line program. There is also no stage that assembles a
whole source file. Nothing here does the following:

- checks and encodes the instructions of a program line by line,
- resolves `.entry` lines,
- writes object, extern or entry listings.

The first pass and the word encoders are the parts such a stage would build
on.

## Tests

```
pip install .[test]
pytest
```