import heapq


class PhysicalMemory:
    """Fixed-capacity frame table. Each slot is free (None) or holds one VPN.

    Free frame numbers are kept in a min-heap so the lowest free frame and
    the free count are available without scanning.
    """

    def __init__(self, num_frames):
        if num_frames < 1:
            raise ValueError(f"Physical memory needs at least one frame, got {num_frames}")
        self.num_frames = num_frames
        self.frames = [None] * num_frames
        self.free_frames = list(range(num_frames))

    def find_free_frame(self):
        if self.free_frames:
            return self.free_frames[0]
        return None

    def free_frame_count(self):
        return len(self.free_frames)

    def allocate_frame(self, frame_num, virtual_page_num):
        if self.frames[frame_num] is not None:
            raise ValueError(f"Frame {frame_num} already holds page {self.frames[frame_num]:#x}")
        if self.free_frames[0] == frame_num:
            heapq.heappop(self.free_frames)
        else:
            self.free_frames.remove(frame_num)
            heapq.heapify(self.free_frames)
        self.frames[frame_num] = virtual_page_num

    def free_frame(self, frame_num):
        if self.frames[frame_num] is None:
            return
        self.frames[frame_num] = None
        heapq.heappush(self.free_frames, frame_num)

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def occupied_frames(self):
        return [(i, vpn) for i, vpn in enumerate(self.frames) if vpn is not None]

    def is_full(self):
        return not self.free_frames

    def dump(self):
        return list(self.frames)


class Statistics:
    def __init__(self):
        self.reads = 0
        self.writes = 0
        self.page_faults = 0
        self.total_accesses = 0

    def record_access(self, write):
        self.total_accesses += 1
        if write:
            self.writes += 1
        else:
            self.reads += 1

    def record_page_fault(self):
        self.page_faults += 1

    @property
    def fault_rate(self):
        accesses = self.reads + self.writes
        if accesses == 0:
            return 0.0
        return self.page_faults / accesses

    def __str__(self):
        return (f"num reads = {self.reads}\n"
                f"num writes = {self.writes}\n"
                f"percentage of page faults = {self.fault_rate:.2f}")
