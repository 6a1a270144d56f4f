"""Benchmark minitiff write and read performance."""

from __future__ import annotations

import io
import sys
import time

import numpy as np


def benchmark(func, warmup=1, runs=5):
    """Run benchmark and return average time in ms."""
    for _ in range(warmup):
        func()
    times = []
    for _ in range(runs):
        t0 = time.perf_counter()
        func()
        t1 = time.perf_counter()
        times.append((t1 - t0) * 1000)
    avg = sum(times) / len(times)
    std = (sum((t - avg) ** 2 for t in times) / len(times)) ** 0.5
    return avg, std


def make_images():
    """Return test images keyed by label."""
    rng = np.random.default_rng(42)
    return {
        'gray_u1': rng.integers(0, 255, (1024, 1024), np.uint8),
        'rgb_u2': rng.integers(0, 65535, (1024, 1024, 3), np.uint16),
        'rgba_f4': rng.random((1024, 1024, 4), np.float32),
    }


def run_benchmarks(runs=10):
    """Run write and read benchmarks on in-memory streams."""
    import minitiff

    print(f'minitiff version: {minitiff.__version__}')
    print(f'numpy version: {np.__version__}')
    print(f'Python: {sys.version}')
    print()

    for key, data in make_images().items():
        stream = io.BytesIO()

        def bench_write(s=stream, d=data):
            s.seek(0)
            minitiff.imwrite(s, d)

        avg, std = benchmark(bench_write, runs=runs)
        print(f'  imwrite [{key}, {data.shape}]: {avg:.1f} +/- {std:.1f} ms')

        def bench_read(s=stream):
            s.seek(0)
            return minitiff.imread(s)

        avg, std = benchmark(bench_read, runs=runs)
        assert np.array_equal(bench_read(), data)
        print(f'  imread [{key}, {data.shape}]: {avg:.1f} +/- {std:.1f} ms')

        def bench_load(s=stream, d=data):
            s.seek(0)
            out = np.empty_like(d)
            return minitiff.load(
                s, lambda w, h, c, b, reader: reader.read_bytes(out)
            )

        avg, std = benchmark(bench_load, runs=runs)
        assert bench_load()
        print(f'  load [{key}, {data.nbytes} bytes]: '
              f'{avg:.1f} +/- {std:.1f} ms')
        print()


if __name__ == '__main__':
    run_benchmarks(runs=int(sys.argv[1]) if len(sys.argv) > 1 else 10)
