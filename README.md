# userbench

Measures how long it takes to insert and look up user records in four data
structures:

- a binary search tree keyed by user id (`userbench.trees.IdTree`)
- a binary search tree keyed by screen name (`userbench.trees.NameTree`)
- a hash table with separate chaining (`userbench.hashing.OpenHashTable`)
- a hash table with linear probing (`userbench.hashing.ClosedHashTable`)

## Installing

    pip install .

The package has no dependencies outside the standard library. To run the
tests:

    pip install ".[test]"
    pytest

## The data file

Records are read from a CSV file with a header line followed by rows of ten
fields: id, screen name, tags, avatar, followers count, friends count,
language, last seen, tweet id and a bracketed list of friend ids. A line is
split on its first nine commas, so the last field keeps any further commas.
Double quotes and spaces are stripped from the text fields; numeric fields
that are not all digits become 0.

`userbench.parsing.read_valid_users(path, limit=40000)` returns the users that
have a positive id and a non-empty screen name, at most `limit` of them. A
file that cannot be opened yields an empty list. The lower level helpers
`clean_field`, `parse_tags`, `parse_friends`, `split_csv_fields` and
`parse_user` are in the same module; `parse_user` returns a
`userbench.models.User`.

## Using the structures

    from userbench.parsing import read_valid_users
    from userbench.trees import IdTree, NameTree
    from userbench.hashing import OpenHashTable, ClosedHashTable

    users = read_valid_users("data.csv", 40000)

    by_id = IdTree()
    for user in users:
        by_id.insert(user)
    by_id.contains(users[0].id)          # True
    by_id.find(users[0].id)              # the User, or None
    by_id.find_where(lambda u: u.lang == "es")   # first match in pre-order, or None

    table = ClosedHashTable(80021)
    for user in users:
        table.insert(user)
    table.contains_id(users[0].id)       # True
    table.contains_name(users[0].screen_name)

Both trees ignore a user whose key is already present, and support `len()`
and `in`. The open table keeps every user it is given in the bucket of its
id. The closed table places each user in the first free slot from its id's
slot and raises `OverflowError` when every slot is taken. Both tables raise
`ValueError` for a size that is not positive. Ids are hashed by
`hashing.id_hash` and screen names by `hashing.name_hash`.

## Running the benchmarks

`userbench.benchmark` holds the timed runs. Results are returned as
`userbench.models.InsertionResult` and `userbench.models.SearchResult`
records.

    import random
    from userbench import benchmark
    from userbench.hashing import OpenHashTable
    from userbench.parsing import read_valid_users

    id_load = benchmark.load_id_tree("data.csv")
    name_load = benchmark.load_name_tree("data.csv")
    # each is a TreeLoad with .tree, .grid, .read_seconds and .insert_seconds

    users = read_valid_users("data.csv")
    searches = benchmark.search_bst(id_load.tree, name_load.tree, users, random.Random(1))

    grid, seconds = benchmark.insert_open_hash(OpenHashTable(55001), users)
    hash_searches = benchmark.search_hash("abierto", users, random.Random(1))

- `load_id_tree` and `load_name_tree` read the file and insert its named users,
  recording the elapsed time at 0 and after every 5,000 insertions. The id
  tree also inserts and times any users left after the last full step; the
  name tree leaves them out. If the file cannot be opened a message goes to
  standard error and an empty load is returned.
- `insert_open_hash` and `insert_closed_hash` fill the given table and a
  second table of the same size, timing both in steps of 5,000 (targets `id`
  and `screenName`), and return the checkpoints with the total seconds.
- `search_bst` and `search_hash` run 100 successful and 100 failing lookups
  by id and by name at sizes 5,000, 10,000, 20,000 and 40,000, stopping at the
  first size larger than the number of users, and report the mean nanoseconds
  per lookup. `search_hash` builds a table of `2n + 1` slots for each size;
  its kind is `"abierto"` (chaining) or `"cerrado"` (linear probing), and any
  other kind raises `ValueError`.

## What this package does not do

There is no command-line program: the benchmarks are run by calling the
functions above. Results are returned as Python objects only; the package
does not write them to CSV files or create any result directories.