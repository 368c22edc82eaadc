# ripmail

This package provides low-level pieces for taking MIME e-mail apart. It
uses only the standard library.

## Modules

- `ripmail.ffget`
  - `LineReader` wraps a binary stream and returns `bytes`.
  - `readline(max_size)` returns the next line with its line break, or
    `None` at the end of input. Lines may end in `\n`, `\r\n`, `\n\r` or
    `\r`.
  - After a `\r\r` sequence or a lone `\r`, the reader switches to
    single-delimiter mode, in which every `\r` and `\n` ends a line.
  - The reader also offers `getc`, `ungetc`, `read_raw`, `tell`, `seek`
    and `close`.
  - It can be iterated line by line and used as a context manager.
    Closing it does not close the stream.
  - `LineBreak` records which break ended the last line.
  - NUL bytes become spaces unless `allow_nul=True` is passed.
- `ripmail.boundary_stack`
  - `BoundaryStack` holds nested multipart boundaries, with the innermost
    on top.
  - `matches(line)` recognises a boundary line and drops any boundaries
    nested above the one that matched.
  - `non_hyphen_length(boundary)` counts the ASCII letters and digits in a
    boundary.
- `ripmail.decoders`
  - These functions work on `bytes`: `decode_short64`,
    `decode_quoted_printable` (with `QPMode`), `decode_qp_text`,
    `decode_qp_iso`, `decode_multipart` (`%XX` escapes) and `decode_iso`.
  - `decode_iso` decodes RFC 2047 encoded words such as
    `=?utf-8?Q?...?=` and `=?utf-8?B?...?=`.
  - Malformed input is decoded leniently and does not raise.
- `ripmail.filename_filters`
  - `FilenameFilter.filter(name)` makes an attachment filename safe to
    write. It strips surrounding quotes, directory parts and `?`
    parameters.
  - With `mac=True`, `/` is turned into `-` first.
  - With `paranoid=True`, every character except ASCII letters, digits and
    dots becomes `_`.
- `ripmail.logger`
  - `Logger`, `LogMode`, `get_logger()` and `log()` form a small logging
    front end.
  - Output can go to stderr, stdout, a file, syslog or nowhere.
  - Messages have `%` doubled and can be wrapped at `wrap_length`
    characters.
  - The shared logger writes to syslog where the platform has it, and to
    stderr otherwise.

## Example

```python
from ripmail.decoders import decode_iso
from ripmail.filename_filters import FilenameFilter

name = decode_iso(b"=?iso-8859-1?Q?report=5Ffinal.pdf?=", 1024).decode("latin-1")
safe = FilenameFilter().filter('"../../' + name + '"')
# safe == "report_final.pdf"
```

## What it does not do

The package offers building blocks only. It has no command-line program.
It does not walk a whole message or write attachments to disk.

## Running the tests

```
pip install .[test]
pytest
```