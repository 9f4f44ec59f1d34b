import argparse
import logging
import sys

import matplotlib
import matplotlib.pyplot as plt

from simulator import PHYS_MEM_SIZE, SUPPORTED_PAGE_SIZES, InvalidConfig, VirtualMemorySimulator

log = logging.getLogger(__name__)

DEFAULT_INTERVALS = [1, 5, 10, 25, 50, 100, 200, 500]


def sweep(filename, page_sizes=SUPPORTED_PAGE_SIZES, intervals=DEFAULT_INTERVALS,
          memory_size=PHYS_MEM_SIZE):
    """Run one simulation per (page size, clear interval) pair.

    Returns {page_size: {interval: fault_rate}}.
    """
    results = {}
    for page_size in page_sizes:
        results[page_size] = {}
        for interval in intervals:
            simulator = VirtualMemorySimulator(page_size, interval, memory_size=memory_size)
            stats = simulator.run_simulation(filename)
            results[page_size][interval] = stats.fault_rate
            log.info("page size %d, interval %d: fault rate %.4f", page_size, interval, stats.fault_rate)
    return results


def check_config(filename, page_sizes=SUPPORTED_PAGE_SIZES, intervals=DEFAULT_INTERVALS,
                 memory_size=PHYS_MEM_SIZE):
    for page_size in page_sizes:
        for interval in intervals:
            VirtualMemorySimulator(page_size, interval, memory_size=memory_size)
    with open(filename, 'r'):
        pass


def plot_sweep(results, output='nru_fault_rates.png', title=None):
    fig, ax = plt.subplots(figsize=(8, 5))
    fig.suptitle(title or 'NRU Page Fault Rate vs. Reference Bit Clear Interval',
                 fontsize=14, fontweight='bold')

    for page_size, rates in sorted(results.items()):
        intervals = sorted(rates)
        ax.plot(intervals, [rates[i] for i in intervals], marker='o', label=f'{page_size}-byte pages')

    ax.set_xscale('log')
    ax.set_xlabel('clear_r_every (accesses)')
    ax.set_ylabel('Page fault rate')
    ax.set_ylim(bottom=0)
    ax.grid(alpha=0.3)
    ax.legend(loc='best', frameon=True)

    plt.tight_layout()
    fig.savefig(output, dpi=300, bbox_inches='tight')
    plt.close(fig)
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description="Plot NRU fault rates across page sizes and clear intervals")
    parser.add_argument('inputfile')
    parser.add_argument('--intervals', type=int, nargs='+', default=DEFAULT_INTERVALS)
    parser.add_argument('--memory-size', type=int, default=PHYS_MEM_SIZE)
    parser.add_argument('--output', default='nru_fault_rates.png')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(message)s')
    matplotlib.use('Agg')

    try:
        check_config(args.inputfile, intervals=args.intervals, memory_size=args.memory_size)
        print("Running simulations...")
        results = sweep(args.inputfile, intervals=args.intervals, memory_size=args.memory_size)
    except (InvalidConfig, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{'Page size':<10} " + ' '.join(f"{i:>8}" for i in args.intervals))
    print("-" * (11 + 9 * len(args.intervals)))
    for page_size, rates in results.items():
        print(f"{page_size:<10} " + ' '.join(f"{rates[i]:>8.4f}" for i in args.intervals))

    plot_sweep(results, args.output)
    print(f"\nGraph saved as '{args.output}'")
    return 0


if __name__ == '__main__':
    sys.exit(main())
