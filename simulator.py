import argparse
import logging
import re
import sys
from collections import namedtuple

from page_table import PageTable
from memory_manager import PhysicalMemory, Statistics

log = logging.getLogger(__name__)

PHYS_MEM_SIZE = 1024  # in bytes
SUPPORTED_PAGE_SIZES = (32, 64, 128)
ADDRESS_MASK = 0xFFFFFFFF
NO_PAGE = 0xFFFFFFFF
HEX_PREFIX = re.compile(r'(?:0[xX])?([0-9a-fA-F]*)')

AccessResult = namedtuple('AccessResult', ['vpn', 'frame', 'hit', 'evicted_vpn'])


class InvalidConfig(ValueError):
    pass


class AddressTranslator:
    """Splits 32-bit virtual addresses into page number and offset."""

    def __init__(self, page_size):
        if page_size not in SUPPORTED_PAGE_SIZES:
            raise InvalidConfig(
                f"Page size must be one of {', '.join(map(str, SUPPORTED_PAGE_SIZES))}, got {page_size}")
        self.page_size = page_size
        self.offset_bits = page_size.bit_length() - 1
        self.offset_mask = page_size - 1

    def parse_address(self, address):
        address &= ADDRESS_MASK
        page_num = address >> self.offset_bits
        offset = address & self.offset_mask
        return page_num, offset

    def get_vpn(self, address):
        return (address & ADDRESS_MASK) >> self.offset_bits


class VirtualMemorySimulator:

    def __init__(self, page_size, clear_r_every, memory_size=PHYS_MEM_SIZE):
        self.translator = AddressTranslator(page_size)

        if isinstance(clear_r_every, bool) or not isinstance(clear_r_every, int) or clear_r_every <= 0:
            raise InvalidConfig(f"clear_r_every must be a positive integer, got {clear_r_every!r}")
        self.clear_r_every = clear_r_every

        num_frames = memory_size // page_size
        if num_frames < 1:
            raise InvalidConfig(
                f"Physical memory of {memory_size} bytes holds no {page_size}-byte pages")
        self.memory_size = memory_size

        self.page_table = PageTable()
        self.physical_memory = PhysicalMemory(num_frames=num_frames)
        self.stats = Statistics()

    @property
    def page_size(self):
        return self.translator.page_size

    def handle_memory_reference(self, address, write):
        self.stats.record_access(write)

        page_num = self.translator.get_vpn(address)

        if self.page_table.is_resident(page_num):
            entry = self.page_table.mark_accessed(page_num, write)
            result = AccessResult(page_num, entry.frame, True, None)
        else:
            result = self.handle_page_fault(page_num, write)

        # Aging runs only after the access is fully counted
        self.maybe_clear_reference_bits()
        return result

    def handle_page_fault(self, page_num, write):
        self.stats.record_page_fault()

        evicted = None
        frame_num = self.physical_memory.find_free_frame()

        if frame_num is None:
            frame_num = self.select_victim_nru()
            evicted = self.evict_page(frame_num)

        self.physical_memory.allocate_frame(frame_num, page_num)
        self.page_table.install(page_num, frame_num, write)
        log.debug("Page fault: vpn %#x loaded into frame %d (write=%s)", page_num, frame_num, bool(write))

        return AccessResult(page_num, frame_num, False, evicted)

    def select_victim_nru(self):
        """Pick the occupied frame with the lowest (R, M) class.

        Frames are scanned in index order so ties go to the lowest index; the
        scan stops at the first class 0 frame.
        """
        victim_frame = None
        best_class = 4

        for frame_num, vpage_num in self.physical_memory.occupied_frames():
            entry = self.page_table.lookup(vpage_num)
            page_class = entry.nru_class()

            if page_class < best_class:
                best_class = page_class
                victim_frame = frame_num
                if best_class == 0:
                    break

        if victim_frame is None:
            raise RuntimeError("No occupied frame to evict")
        return victim_frame

    def evict_page(self, frame_num):
        vpage_num = self.physical_memory.get_frame_info(frame_num)
        entry = self.page_table.lookup(vpage_num)
        log.debug("Evicting vpn %#x from frame %d (class %d)", vpage_num, frame_num, entry.nru_class())

        self.page_table.evict(vpage_num)
        self.physical_memory.free_frame(frame_num)
        return vpage_num

    def maybe_clear_reference_bits(self):
        if self.stats.total_accesses % self.clear_r_every == 0:
            log.debug("Clearing reference bits after %d accesses", self.stats.total_accesses)
            self.page_table.reset_reference_bits()

    def run_trace(self, lines):
        for address, write in read_trace(lines):
            self.handle_memory_reference(address, write)
        return self.stats

    def run_simulation(self, filename):
        log.info("Running NRU simulation on %s (page size %d, clear R every %d, %d frames)",
                 filename, self.page_size, self.clear_r_every, self.physical_memory.num_frames)

        with open(filename, 'r') as f:
            self.run_trace(f)

        log.info("Finished %s: %d accesses, %d page faults",
                 filename, self.stats.total_accesses, self.stats.page_faults)
        return self.stats

    def frame_dump(self):
        return self.physical_memory.dump()


def parse_trace_line(line):
    """Return (address, write) for a trace line, or None if it is malformed.

    Only the first two tokens are read. The address keeps its leading hex
    digits (none gives 0) and any non-zero op is a write.
    """
    parts = line.split()
    if len(parts) < 2:
        return None

    try:
        operation = int(parts[1])
    except ValueError:
        return None

    digits = HEX_PREFIX.match(parts[0]).group(1)
    address = int(digits, 16) & ADDRESS_MASK if digits else 0
    return address, operation != 0


def read_trace(lines):
    for line_num, line in enumerate(lines, 1):
        if not line.strip():
            continue

        access = parse_trace_line(line)
        if access is None:
            log.debug("Stopping at malformed trace line %d: %r", line_num, line.rstrip('\n'))
            return
        yield access


def format_report(stats, frames):
    lines = [str(stats)]
    for i, vpn in enumerate(frames):
        lines.append(f"mem[{i}]: {NO_PAGE if vpn is None else vpn:x}")
    return '\n'.join(lines)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Replay a memory trace and count page faults under NRU replacement")
    parser.add_argument('inputfile', help="trace file of '<hex address> <0|1>' lines")
    parser.add_argument('pagesize', type=int, help="page size in bytes (32, 64 or 128)")
    parser.add_argument('clear_r_every', type=int, help="clear reference bits every N accesses")
    parser.add_argument('--memory-size', type=int, default=PHYS_MEM_SIZE,
                        help=f"physical memory size in bytes (default {PHYS_MEM_SIZE})")
    parser.add_argument('-v', '--verbose', action='store_true', help="log faults and evictions")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        simulator = VirtualMemorySimulator(args.pagesize, args.clear_r_every,
                                           memory_size=args.memory_size)
        stats = simulator.run_simulation(args.inputfile)
    except (InvalidConfig, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(format_report(stats, simulator.frame_dump()))
    return 0


if __name__ == '__main__':
    sys.exit(main())
