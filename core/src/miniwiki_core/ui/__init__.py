"""Server-rendered wiki pages.

Every page URL has the shape /<action>/<title>; a single catch-all route
validates it and dispatches through a fixed action table:
- view: render a page, or redirect to its editor when it does not exist
- edit: render the edit form (empty for new pages)
- save: persist the submitted body and redirect back to the page
- view500: always fail with a server error
"""
