"""Per-algorithm execution statistics, owned by whoever creates them."""
import threading
from collections import defaultdict


class PerformanceMonitor:
    """
    Accumulates execution time, call count and failure count per algorithm.
    One instance can be shared by concurrent callers; all updates hold a lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._execution_times = defaultdict(float)
        self._execution_counts = defaultdict(int)
        self._failure_counts = defaultdict(int)

    def record_execution_time(self, algorithm_name, execution_time):
        """
        Records one successful run that took execution_time milliseconds.
        """
        with self._lock:
            self._execution_times[algorithm_name] += execution_time
            self._execution_counts[algorithm_name] += 1

    def record_failure(self, algorithm_name):
        with self._lock:
            self._failure_counts[algorithm_name] += 1

    def get_execution_count(self, algorithm_name):
        with self._lock:
            return self._execution_counts.get(algorithm_name, 0)

    def get_total_execution_time(self, algorithm_name):
        with self._lock:
            return self._execution_times.get(algorithm_name, 0.0)

    def get_failure_count(self, algorithm_name):
        with self._lock:
            return self._failure_counts.get(algorithm_name, 0)

    def get_average_execution_time(self, algorithm_name):
        """
        Returns the mean milliseconds per successful run, 0.0 if there were none.
        """
        with self._lock:
            count = self._execution_counts.get(algorithm_name, 0)
            if count == 0:
                return 0.0
            return self._execution_times[algorithm_name] / count

    def get_all_stats(self):
        """
        Returns a dictionary of algorithm name -> totalTime, executionCount,
        averageTime and failureCount.
        """
        with self._lock:
            names = set(self._execution_counts) | set(self._failure_counts)
            stats = {}
            for name in sorted(names):
                count = self._execution_counts.get(name, 0)
                total = self._execution_times.get(name, 0.0)
                stats[name] = {
                    'totalTime': total,
                    'executionCount': count,
                    'averageTime': total / count if count else 0.0,
                    'failureCount': self._failure_counts.get(name, 0),
                }
            return stats

    def clear_stats(self):
        with self._lock:
            self._execution_times.clear()
            self._execution_counts.clear()
            self._failure_counts.clear()


def format_memory_size(size):
    """
    Formats a byte count as B, KB, MB or GB with two decimals.
    """
    if size < 1024:
        return f"{size} B"
    elif size < 1024 ** 2:
        return f"{size / 1024:.2f} KB"
    elif size < 1024 ** 3:
        return f"{size / 1024 ** 2:.2f} MB"
    return f"{size / 1024 ** 3:.2f} GB"
