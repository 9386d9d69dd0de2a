# motor

`motor` is a small version control system. It stores file contents, trees,
commits and annotated tags as zlib-compressed objects addressed by their
SHA-1 hash, and keeps branches, tags, `HEAD` and the staging index as plain
files inside a `.motor` directory at the root of the working tree.

It has no dependencies outside the standard library.

## Installing

```
pip install .
```

This installs the `motor` command.

## Using the command

```
motor init [<dir>]                  Create an empty repository (default: current directory)
motor add <file/dir> ...            Stage files, or every file below a directory
motor commit -m <message>           Record the staged files as a commit
motor branch                        List branches, marking the current one
motor branch <name>                 Create a branch at the current commit
motor branch -d <name>              Delete a branch (not the current one)
motor checkout <branch>             Switch to a branch
motor checkout <hash>               Check out a commit (detached HEAD)
motor tag                           List tags
motor tag <name>                    Create a lightweight tag at the current commit
motor tag -a <name> -m <message>    Create an annotated tag object
motor tag -d <name>                 Delete a tag
motor log                           Show the commit history from HEAD
motor status                        Show the current branch and staged files
```

Messages printed by the command are in Russian. Commands other than `init`
look for a `.motor` directory in the current directory and then in each
parent directory. The command exits with status 1 when called without a
command, with an unknown command, or when no repository is found; other
failures are reported on standard error.

A typical session:

```
motor init
motor add notes.txt
motor commit -m "First notes"
motor branch experiment
motor checkout experiment
motor log
```

Checking out a branch or a commit deletes everything in the working tree
except `.motor` and writes the files of that commit in its place.

## Using the library

```python
from motor.repository import Repository, find_repository

repo = Repository.init("project")
repo.add("notes.txt")                 # path relative to the repository root
commit_hash = repo.commit("First notes")
repo.create_branch("experiment", commit_hash)
repo.create_tag("v1", commit_hash, "First release")
print(repo.list_branches())           # ['experiment', 'master']
print(repo.commit_history(repo.head_commit()))
```

Modules:

- `motor.repository` — `Repository` (`init`, `add`, `remove`, `commit`,
  `commit_history`, `checkout`, `checkout_branch`, branch and tag methods,
  `write_object`, `read_object`, `index_entries`, `head_commit`) and
  `find_repository`, which searches upwards from a directory.
- `motor.objects` — `Blob`, `Tree`/`TreeEntry`, `Commit` and `Tag`, each with
  `serialize()`, a `deserialize()` class method and `object_id()`, plus
  `ObjectType` and `deserialize_object`.
- `motor.index` — `Index` and `IndexEntry`, the staging file with one
  `mode hash path` line per entry.
- `motor.reference` — `References`, reading and writing reference files and
  `HEAD`; `RefNotFoundError` when a reference is missing.
- `motor.utils` — SHA-1 hashing, zlib compression, hex helpers and
  `MotorError`, the exception raised by failed operations.
- `motor.compression` — a run-length `compress`/`decompress` pair; the
  repository itself always uses zlib.

Object reads and writes are logged at debug level on the
`motor.repository` logger.

## Limits

- A commit's tree is flat: each staged file is recorded under its file name
  only, so files in subdirectories lose their directory, and files with the
  same name in different directories collide.
- `status` lists what is in the index; it does not compare the index with
  the working tree or with the last commit.
- There is no diff, merge, reset, or remote support, and no way to unstage
  from the command line (`Repository.remove` does it from the library).
- Author, committer and tagger are fixed to
  `Motor <motor@example.com>` with a `+0000` time zone.

## Running the tests

```
pip install .[test]
pytest
```