"""
Process-wide writer lock for the task and log collections.

Every log mutation replays the full history, decides, writes and commits while
holding this lock, so each decision sees a consistent snapshot.
"""
import threading

write_lock = threading.RLock()
