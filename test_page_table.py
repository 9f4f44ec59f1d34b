import pytest

from page_table import PageTable, PageTableEntry


def test_new_entry_is_invalid():
    entry = PageTableEntry(5)
    assert not entry.valid
    assert entry.frame is None
    assert not entry.referenced and not entry.modified
    assert entry.nru_class() == 0


def test_lookup_unknown_page():
    table = PageTable()
    assert table.lookup(3) is None
    assert not table.is_resident(3)
    assert len(table) == 0


def test_install_sets_bits():
    table = PageTable()
    entry = table.install(7, 2, write=False)
    assert table.lookup(7) is entry
    assert entry.valid and entry.frame == 2
    assert entry.referenced and not entry.modified
    assert entry.nru_class() == 2

    entry = table.install(8, 3, write=True)
    assert entry.modified
    assert entry.nru_class() == 3


def test_install_resident_page_fails():
    table = PageTable()
    table.install(1, 0, write=False)
    with pytest.raises(ValueError):
        table.install(1, 1, write=False)


def test_evict_clears_entry():
    table = PageTable()
    table.install(4, 1, write=True)
    assert table.evict(4) == 1

    assert not table.is_resident(4)
    entry = table.entries[4]
    assert not entry.valid
    assert entry.frame is None
    assert not entry.referenced and not entry.modified


def test_evict_and_mark_require_resident_page():
    table = PageTable()
    with pytest.raises(ValueError):
        table.evict(9)
    with pytest.raises(ValueError):
        table.mark_accessed(9, write=True)


def test_reinstall_after_evict():
    table = PageTable()
    table.install(4, 1, write=True)
    table.evict(4)
    entry = table.install(4, 0, write=False)
    assert entry.frame == 0
    assert not entry.modified


def test_read_hit_never_changes_modified():
    table = PageTable()
    table.install(2, 0, write=False)
    table.entries[2].referenced = False

    table.mark_accessed(2, write=False)
    assert table.entries[2].referenced
    assert not table.entries[2].modified

    table.mark_accessed(2, write=True)
    table.mark_accessed(2, write=False)
    assert table.entries[2].modified


def test_reset_reference_bits_only_touches_r():
    table = PageTable()
    table.install(1, 0, write=True)
    table.install(2, 1, write=False)
    table.install(3, 2, write=False)
    table.evict(3)

    table.reset_reference_bits()

    assert all(not entry.referenced for entry in table.entries.values())
    assert table.entries[1].modified
    assert len(table) == 2
    assert {entry.virtual_page_num for entry in table.valid_entries()} == {1, 2}
