import os, sys
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

import threading

from performance import PerformanceMonitor, format_memory_size


def test_records_and_averages():
    monitor = PerformanceMonitor()
    monitor.record_execution_time("Jaccard Similarity", 2.0)
    monitor.record_execution_time("Jaccard Similarity", 4.0)

    assert monitor.get_execution_count("Jaccard Similarity") == 2
    assert monitor.get_total_execution_time("Jaccard Similarity") == 6.0
    assert monitor.get_average_execution_time("Jaccard Similarity") == 3.0


def test_unknown_algorithm_has_empty_stats():
    monitor = PerformanceMonitor()
    assert monitor.get_execution_count("nope") == 0
    assert monitor.get_total_execution_time("nope") == 0.0
    assert monitor.get_average_execution_time("nope") == 0.0
    assert monitor.get_failure_count("nope") == 0


def test_all_stats_and_clear():
    monitor = PerformanceMonitor()
    monitor.record_execution_time("Cosine Similarity", 1.5)
    monitor.record_failure("Broken")

    assert monitor.get_all_stats() == {
        "Broken": {"totalTime": 0.0, "executionCount": 0, "averageTime": 0.0, "failureCount": 1},
        "Cosine Similarity": {"totalTime": 1.5, "executionCount": 1, "averageTime": 1.5, "failureCount": 0},
    }

    monitor.clear_stats()
    assert monitor.get_all_stats() == {}


def test_concurrent_recording():
    monitor = PerformanceMonitor()

    def worker():
        for _ in range(1000):
            monitor.record_execution_time("Levenshtein Distance", 1.0)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert monitor.get_execution_count("Levenshtein Distance") == 8000
    assert monitor.get_total_execution_time("Levenshtein Distance") == 8000.0


def test_format_memory_size():
    assert format_memory_size(512) == "512 B"
    assert format_memory_size(2048) == "2.00 KB"
    assert format_memory_size(5 * 1024 ** 2) == "5.00 MB"
    assert format_memory_size(3 * 1024 ** 3) == "3.00 GB"
