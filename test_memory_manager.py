import pytest

from memory_manager import PhysicalMemory, Statistics


def test_frames_start_free():
    memory = PhysicalMemory(num_frames=4)
    assert memory.free_frame_count() == 4
    assert memory.find_free_frame() == 0
    assert not memory.is_full()
    assert memory.occupied_frames() == []
    assert memory.dump() == [None] * 4


def test_allocate_uses_lowest_free_frame():
    memory = PhysicalMemory(num_frames=3)
    memory.allocate_frame(0, 0x10)
    memory.allocate_frame(1, 0x11)
    assert memory.find_free_frame() == 2

    memory.free_frame(0)
    assert memory.find_free_frame() == 0
    assert memory.occupied_frames() == [(1, 0x11)]


def test_free_list_tracks_out_of_order_frames():
    memory = PhysicalMemory(num_frames=4)
    memory.allocate_frame(2, 0x20)
    memory.allocate_frame(0, 0x21)
    assert memory.free_frame_count() == 2
    assert memory.find_free_frame() == 1

    memory.free_frame(2)
    memory.free_frame(2)
    assert memory.free_frame_count() == 3
    memory.allocate_frame(1, 0x22)
    assert memory.find_free_frame() == 2
    memory.allocate_frame(2, 0x23)
    memory.allocate_frame(3, 0x24)
    assert memory.is_full()
    assert memory.free_frame_count() == 0
    assert memory.dump() == [0x21, 0x22, 0x23, 0x24]


def test_full_memory():
    memory = PhysicalMemory(num_frames=2)
    memory.allocate_frame(0, 5)
    memory.allocate_frame(1, 6)
    assert memory.is_full()
    assert memory.find_free_frame() is None
    assert memory.free_frame_count() == 0
    assert memory.get_frame_info(1) == 6


def test_allocate_occupied_frame_fails():
    memory = PhysicalMemory(num_frames=1)
    memory.allocate_frame(0, 1)
    with pytest.raises(ValueError):
        memory.allocate_frame(0, 2)


def test_needs_a_frame():
    with pytest.raises(ValueError):
        PhysicalMemory(num_frames=0)


def test_statistics_counts():
    stats = Statistics()
    stats.record_access(write=False)
    stats.record_access(write=True)
    stats.record_access(write=True)
    stats.record_page_fault()

    assert stats.reads == 1
    assert stats.writes == 2
    assert stats.total_accesses == 3
    assert stats.page_faults == 1
    assert stats.fault_rate == pytest.approx(1 / 3)


def test_empty_statistics():
    stats = Statistics()
    assert stats.fault_rate == 0.0
    assert str(stats) == "num reads = 0\nnum writes = 0\npercentage of page faults = 0.00"
