"""Client Layer - async API client, list views with refetch-after-mutation, forms.

Invariants:
    - Views never hold a durable copy: every mutation is followed by a re-list
    - Nothing here raises into the caller for expected failures; views and forms
      expose an error state instead
"""
