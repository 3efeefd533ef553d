"""ViewModel package for UI state and command surfaces.

Call context:
    ``mapty/app/controller.py`` owns the form view model and the web runtime
    reads the list projection to render the travel log list.

Dependencies:
    Modules in this package depend on domain types and lightweight formatting
    helpers only. I/O adapters and use-case orchestration remain outside.
"""
