# tflsp

Building blocks for a Terraform language server. The package is plain Python
and has no third-party dependencies.

## Modules

- `tflsp.mdplain`: `clean(markdown)` strips common markdown syntax (emphasis,
  headers, links, images, code spans, HTML tags) down to plain text.
- `tflsp.pathcmp`: `path_equals(path1, path2)` normalises both paths and
  compares them. Only the drive/volume part is compared without regard to case.
- `tflsp.pathtpl`: `TemplatedPath`, `new_path(name)` and
  `parse_raw_path(name, raw_path)`. These handle path templates whose actions
  call named functions, such as `{{ pid }}`, `{{ ppid }}` and `{{ timestamp }}`.
  Comments (`{{/* ... */}}`) and the `{{-`/`-}}` trim markers are accepted.
  Anything else raises `TemplateError`.
- `tflsp.logfile`: `new_logger(stream)` gives a timestamped logger on a stream.
  `open_file_logger(raw_path)` expands a templated path, requires it to be
  absolute, truncates the file (mode 0600) and returns a `FileLogger`. A
  `FileLogger` has a `.logger` attribute and a `close()` method, and can be
  used as a context manager. `validate_exec_log_path(raw_path)` and
  `parse_exec_log_path(method, raw_path)` work the same way with an extra
  `{{ method }}` function. `{{ args }}` is kept as an alias for it.
- `tflsp.hclrange`: the `Pos` and `Range` dataclasses, plus
  `contains_pos(rng, pos)` and `range_over(a, b)`.
- `tflsp.hclsyntax`: a small syntax tree made of `Block`, `Body`, `Attribute`
  and `Expression`, with lookups over it:
  - `block_at_pos`
  - `attribute_at_pos`
  - `attribute_with_name`
  - `block_attribute_literal_value`
  - `to_literal`
  - `to_literal_boolean`
  - `extract_msgraph_url`
- `tflsp.hclnode`: `build_hcl_node(tokens)` builds a tolerant tree of
  `HclNode` key/value nodes from a stream of `Token`s. It accepts incomplete
  input. `hcl_node_arrays_of_pos(node, pos)` returns the chain of keyed nodes
  that contain a position.
- `tflsp.tokens`: semantic token legends and the encoding that LSP clients
  expect:
  - `token_types_legend`
  - `token_modifiers_legend`
  - `bit_mask`
  - `SemanticTokensCapabilities.full_request()`
  - `TokenEncoder.encode()`
- `tflsp.files`: `FileHandler` and `VersionedFileHandler` map `file://` URIs
  to paths. They are built with these functions:
  - `file_handler_from_document_uri`
  - `file_handler_from_dir_uri`
  - `file_handler_from_path`
  - `file_handler_from_dir_path`
- `tflsp.clientctx`: per-context client capabilities and client name, held in
  context variables:
  - `with_client_capabilities`
  - `client_capabilities`
  - `set_client_capabilities`
  - `with_client_name`
  - `client_name`
  - `set_client_name`
- `tflsp.convert`: conversions into LSP-shaped dicts:
  - `hcl_pos_to_lsp`
  - `hcl_range_to_lsp`
  - `lsp_pos_to_hcl`
  - `hcl_severity_to_lsp`
  - `hcl_diags_to_lsp`
  - `links`
  - `markup_content`
  - `hover_data`
  - `ref_origins_to_locations`
  - `ref_targets_to_location_links`
  - `command`
- `tflsp.codeactions`: `CodeActions` (with `as_list()` and `only()`),
  `SUPPORTED_CODE_ACTIONS` and `LanguageID`.
- `tflsp.symbols`: `workspace_symbols` and `document_symbols`. They turn
  `BlockSymbol`, `AttributeSymbol` and `ExprSymbol` into LSP symbol dicts,
  leaving out kinds the client does not support.

## Examples

```python
from tflsp.mdplain import clean
from tflsp.pathtpl import parse_raw_path
from tflsp.files import file_handler_from_document_uri
from tflsp.clientctx import with_client_name, client_name
from tflsp.hclrange import Pos, Range
from tflsp.tokens import (
    SERVER_TOKEN_MODIFIERS, SERVER_TOKEN_TYPES, SemanticToken,
    SemanticTokenType, SemanticTokensCapabilities, TokenEncoder,
)

clean("Desc **2**")                            # 'Desc 2'
parse_raw_path("log", "/tmp/ls-{{ pid }}.log")  # '/tmp/ls-<pid>.log'

fh = file_handler_from_document_uri("file:///valid/path/to/file.tf")
fh.valid()      # True
fh.dir()        # '/valid/path/to' (on POSIX systems)
fh.filename()   # 'file.tf'

with with_client_name("vscode"):
    client_name()   # 'vscode'
client_name()       # None

encoder = TokenEncoder(
    lines=[b'myblock "mytype" {\n'],
    tokens=[SemanticToken(SemanticTokenType.BLOCK_TYPE,
                          Range("test.tf", Pos(1, 1, 0), Pos(1, 8, 7)))],
    client_caps=SemanticTokensCapabilities(list(SERVER_TOKEN_TYPES),
                                           list(SERVER_TOKEN_MODIFIERS)),
)
encoder.encode()    # [0, 0, 7, 0, 0]
```

## What this package does not do

- It is not a language server. It has no JSON-RPC transport, no request
  handlers and no command to start one.
- It does not read HCL source text. Callers build `tflsp.hclsyntax` trees
  themselves, and they supply the `Token` stream that `build_hcl_node`
  consumes.
- It carries no provider or API schemas. `extract_msgraph_url` only pulls a
  URL out of a block.

## Running the tests

```
pip install -e .[test]
pytest
```