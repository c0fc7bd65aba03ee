"""
webhatch.templates - Jinja2 Template Files
==========================================

This package contains the Jinja2 templates rendered into new projects.
Templates use the .j2 extension and are rendered by ``webhatch.files``.

Available Templates
-------------------
Core:
    - README.md.j2: Project readme
    - gitignore.j2: Git ignore patterns

Static site:
    - index.html.j2: src/index.html for HTML/CSS projects

React multi-page:
    - react/page.jsx.j2: One page component (Home, About, Contact)
    - react/routes.jsx.j2: react-router route table

Licenses:
    - LICENSE_MIT.j2
    - LICENSE_APACHE2.j2
    - LICENSE_GPL3.j2

Template Context
----------------
Templates receive the fields of ``webhatch.files.TemplateParams``
(project_name, description, author, year, package_manager) plus any
template-specific extras such as ``page`` or ``pages``.
"""

# Templates are loaded dynamically by Jinja2's PackageLoader.
