# difiko

Building blocks for a keyboard-driven reviewer of local git branch diffs.
The package models a parsed diff, groups changed files into a directory
tree, finds intra-line edits, remembers which files have been reviewed,
reads a user colour theme, syntax-highlights diff content, and turns a
file's diff into styled unified or side-by-side lines ready for a terminal
renderer.

## Modules

| Module | Purpose |
| --- | --- |
| `difiko.model` | `FileStatus`, the diff line kinds (`GitHeader`, `IndexHeader`, `OldFile`, `NewFile`, `Hunk`, `Add`, `Del`, `Context`, `NoNewline`, `Binary`), `FileChange`, `Commit`, `sort_files` |
| `difiko.tree` | `DirNode` and `flatten` for a collapsible file tree of `DirRow` and `FileRow` rows |
| `difiko.word_diff` | `word_ranges` and `compute_word_pairings`: character-level changes as UTF-8 byte ranges |
| `difiko.persistence` | `Store`, `OpenResult`, `state_path`, `make_key`, `snapshot_for`: the reviewed-file set per repository and branch pair |
| `difiko.style` | `Color`, `Rgb`, `Indexed`, `Modifier`, `Style`, `Span` |
| `difiko.theme` | `Theme`, `ThemeLoad`, `parse_color`, `parse_json`, `load_from_path`, `load`, `ensure_default_file`, `init` and the colour and style accessors |
| `difiko.layered` | `layered_spans`: base, syntax, word-diff and search styles layered over one line; `SearchMatch` |
| `difiko.blame` | `Blame`, `BlameLine`, `truncate_pad` and the blame gutter spans |
| `difiko.syntax` | `highlight_file`: Pygments-based colouring of a file's diff lines |
| `difiko.diff_view` | `DiffRenderCtx`, `build_unified_lines`, `build_split_lines`, `file_header_spans`, `line_text` |
| `difiko.new_window` | `relaunch_in_new_window`, `spawn_detached`, `relaunch_args`, `shell_quote`, `quote_posix` |
| `difiko.open_file` | `open_command` and `open_in_default_app` for the desktop's default application |

Install with `pip install .`; the tests need the `test` extra.

## Examples

Intra-line changes as byte ranges in the old and the new line:

```python
from difiko.word_diff import word_ranges

old_ranges, new_ranges = word_ranges("foo bar baz", "foo qux baz")
# old_ranges == [(4, 7)], new_ranges == [(4, 7)]
```

A directory tree of changed paths, with one folder collapsed. Directories
come first, in name order, then the files of each level:

```python
from difiko.tree import DirNode, flatten

root = DirNode.from_paths(["src/foo.rs", "src/bar/baz.rs", "README.md"])
for row in flatten(root, {"src/bar"}):
    print(row)
```

Colour values accepted in `theme.json`:

```python
from difiko.theme import parse_color

parse_color("cyan")             # Color.CYAN
parse_color("darkgrey")         # Color.DARK_GRAY
parse_color("#1e2a40")          # Rgb(30, 42, 64)
parse_color("rgb(15, 40, 15)")  # Rgb(15, 40, 15)
parse_color("196")              # Indexed(196)
parse_color("not-a-color")      # None
```

Remembering reviewed files. The stored set is returned only while the set
of changed paths is the same as when it was saved:

```python
from difiko.model import FileChange, FileStatus
from difiko.persistence import Store

files = [FileChange(path="a.rs", status=FileStatus.MODIFIED)]
result = Store.open()            # or Store.open("some/dir/state.json")
store = result.store
store.save_reviewed("/repo", "main", "feature", files, {"a.rs"})
store.load_reviewed("/repo", "main", "feature", files)   # {"a.rs"}
```

If an existing state file cannot be parsed, it is moved aside and
`result.recovered_backup` names where it went.

Styled unified lines for one file:

```python
from difiko.diff_view import DiffRenderCtx, build_unified_lines, line_text
from difiko.model import Add, Context, Del, FileChange, FileStatus, Hunk
from difiko.word_diff import compute_word_pairings

lines = [Hunk("@@ -1,2 +1,2 @@", 1, 2, 1, 2), Context("a"), Del("b"), Add("c")]
change = FileChange(path="x.txt", status=FileStatus.MODIFIED, diff_lines=lines)
ctx = DiffRenderCtx(word_pairings=compute_word_pairings(lines))
for row in build_unified_lines(change, ctx):
    print(line_text(row))
```

Each row is a list of `Span` objects carrying a `Style`. Setting
`ctx.syntax = highlight_file(change)` adds syntax colours, `ctx.blame` adds
a blame gutter, and `ctx.search_matches` with `ctx.search_current`
highlights search hits. `build_split_lines` returns left and right rows of
equal length for a side-by-side view.

## Theme

Any colour can be overridden in `theme.json` in the user configuration
directory (`theme_path()`). `ensure_default_file()` writes a template
listing every key with its default value, unless the file already exists.
`load()` never raises: unknown keys, non-string values and unknown colours
are reported in `ThemeLoad.issues` while the valid keys still apply, and
keys starting with `_` are ignored. Install the result with
`init(load().theme)`; only the first call takes effect.

## What this package does not do

It does not run git or parse git output: the caller supplies `FileChange`,
`Commit` and `Blame` objects. It has no command-line program and draws no
terminal screen; it produces styled spans for a renderer to display.