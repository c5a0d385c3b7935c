# Services package init
"""
Page Relay — Services Layer
=============================

What:  Logic between routes (HTTP) and the upstream API.

Service Inventory:
    - block_transform: Pure descriptor <-> upstream block mapping
    - properties: Name/Status property bag helpers and page summaries
    - UpstreamClient (abstract): Interface for the document-database API
    - NotionClient: Concrete implementation over httpx
    - PageService: Page CRUD, block operations, edit reconciliation
"""
