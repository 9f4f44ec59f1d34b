class PageTableEntry:
    def __init__(self, virtual_page_num):
        self.virtual_page_num = virtual_page_num
        self.frame = None  # None means not in memory
        self.valid = False
        self.referenced = False
        self.modified = False

    def nru_class(self):
        # 0 = not referenced/clean ... 3 = referenced/dirty
        return 2 * int(self.referenced) + int(self.modified)

    def __repr__(self):
        return (f"PageTableEntry(vpn={self.virtual_page_num:#x}, valid={self.valid}, "
                f"frame={self.frame}, R={int(self.referenced)}, M={int(self.modified)})")


class PageTable:
    """Sparse page table keyed by virtual page number.

    Entries are created the first time a page is installed and are kept
    (as invalid) after eviction.
    """

    def __init__(self):
        self.entries = {}

    def lookup(self, virtual_page_num):
        entry = self.entries.get(virtual_page_num)
        if entry is not None and entry.valid:
            return entry
        return None

    def is_resident(self, virtual_page_num):
        return self.lookup(virtual_page_num) is not None

    def install(self, virtual_page_num, frame_num, write):
        entry = self.entries.get(virtual_page_num)
        if entry is None:
            entry = self.entries[virtual_page_num] = PageTableEntry(virtual_page_num)
        elif entry.valid:
            raise ValueError(f"Page {virtual_page_num:#x} is already resident in frame {entry.frame}")

        entry.valid = True
        entry.frame = frame_num
        entry.referenced = True
        entry.modified = bool(write)
        return entry

    def evict(self, virtual_page_num):
        entry = self.lookup(virtual_page_num)
        if entry is None:
            raise ValueError(f"Page {virtual_page_num:#x} is not resident")

        frame_num = entry.frame
        entry.valid = False
        entry.frame = None
        entry.referenced = False
        entry.modified = False
        return frame_num

    def mark_accessed(self, virtual_page_num, write):
        entry = self.lookup(virtual_page_num)
        if entry is None:
            raise ValueError(f"Page {virtual_page_num:#x} is not resident")

        entry.referenced = True
        # Only a write sets M; it stays set until eviction
        if write:
            entry.modified = True
        return entry

    def valid_entries(self):
        return [entry for entry in self.entries.values() if entry.valid]

    def reset_reference_bits(self):
        for entry in self.entries.values():
            if entry.valid:
                entry.referenced = False

    def __len__(self):
        return len(self.valid_entries())
