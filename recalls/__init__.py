"""
Recalls Module - Relation Shelves

Selects "related content" shelves from the per-kind content pools. Unlike
search, there is no query: candidates are recalled through a four-stage
cascade, each stage only filling what the previous ones left:

- **Explicit stage**: hand-entered link slugs, in their given order
- **Intent stage**: shared intent tags, most shared first
- **Tag stage**: shared tags, most shared first
- **Fallback stage**: newest remaining records of the pool

Ties inside a stage go to the newer record. The fallback guarantees a full
shelf whenever the pool has enough records.

Stage tagging:
Every pick remembers the stage that contributed it (`StagePicks.stage_tags`),
which makes shelves easy to inspect from the command line.

Module Structure:
    - base.py: StagePicks accumulator and stage names
    - cascade.py: RelatedCascade and select_related
    - shelves.py: RelatedShelves (related, next_read, slug lookups)

Usage:
    from recalls.shelves import RelatedShelves
    shelves = RelatedShelves(index.pools)
    shelves.related(guide, limit=4)
"""
