"""
Domain layer for engineering resource scheduling.

Pure, synchronous business logic over immutable snapshots. Nothing in this
package touches the database.
"""
