"""create-wm-stack -- interactive Next.js project generator.

Collects a configuration record from the operator, materializes a Next.js
skeleton (config files, boilerplate sources, optional components, hooks and
server actions), installs dependencies and initialises shadcn/ui.

Quick usage::

    create-wm-stack my-app
    python -m wm_stack.pipeline my-app --yes
"""

__version__ = "1.0.0"
