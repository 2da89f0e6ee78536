# Services package init
"""
Noteful Backend — Services Layer
==================================

Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - NamedEntityService: shared list/get/create/update for unique-name entities
    - FolderService / TagService: NamedEntityService + their delete cascades
    - NoteService: filtered listing, tag population, partial updates
    - IntegrityCoordinator: rewrites notes when a folder or tag is deleted

Every service takes the request's AsyncSession in its constructor. Input is
validated (noteful.validation) before the first query, so a rejected request
never touches the store.
"""
