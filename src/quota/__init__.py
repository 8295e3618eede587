"""Daily token quota management.

Tokens and daily token quota

Every user is granted a daily allowance of tokens that gate access to a
metered service. The service that consumes tokens decreases the number of
available tokens and increases the number of used tokens elsewhere. This
package only decides when a user's quota record is stale, which is the case
when it has been last reset before the current calendar day, and resets it to
the daily allowance.

Staleness is resolved on two paths that operate over the same records:

1. lazy reconciliation performed whenever a user's quota is read
1. batch reconciliation performed periodically over all users

Both paths use optimistic concurrency provided by the quota store and converge
to the same state of a record regardless of their order or overlap.
"""
