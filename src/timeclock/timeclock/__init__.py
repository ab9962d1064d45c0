"""Employee time clock client.

The package is organized by feature modules (session, capture, upload, attendance,
history) with a lifecycle controller orchestrating them and a thin Flask panel on top.
"""
