"""Project document review client.

Routes uploaded project files through the Environmental, Electrical,
Civil and Permitting approval sequence.
"""

__version__ = "0.1.0"
