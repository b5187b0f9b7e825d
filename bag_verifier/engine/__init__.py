"""
Verdict engine for handbag photo batches.

Each stage is a plain module of functions; `pipeline.verify_batch` wires
them together for a single request. Nothing here keeps state between
requests.
"""
