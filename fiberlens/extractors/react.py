"""React host adapter — reads a page's fiber tree through Playwright."""

from __future__ import annotations

import logging

from playwright.async_api import Page

from fiberlens.extractors.live import FiberNode, nodes_from_table

logger = logging.getLogger(__name__)

# Returns {root, nodes} or null when the page has no React root container.
# Each component carries the tag/id/class of its nearest host DOM element.
# Values are made JSON-safe in the page: repeated objects, functions, DOM
# nodes and private keys are omitted to keep the payload small.
_FIBER_TABLE_JS = """() => {
    function findRootFiber() {
        for (const el of document.body.children) {
            const key = Object.keys(el).find((k) => k.startsWith('__reactContainer$'));
            if (key) {
                const container = el[key];
                return container.stateNode ? container.stateNode.current : container;
            }
        }
        return null;
    }

    function componentName(fiber) {
        const type = fiber.elementType;
        if (!type || typeof type === 'string') return null;
        if (typeof type === 'function') return type.displayName || type.name || 'Anonymous';
        if (type.displayName) return type.displayName;
        const inner = type.type || type.render;  // memo / forwardRef
        if (inner && (inner.displayName || inner.name)) return inner.displayName || inner.name;
        return 'Anonymous';
    }

    function hostDescriptor(fiber) {
        let node = fiber;
        while (node) {
            if (typeof HTMLElement !== 'undefined' && node.stateNode instanceof HTMLElement) {
                const el = node.stateNode;
                return {
                    tag: el.tagName.toLowerCase(),
                    id: el.id || null,
                    className: (typeof el.className === 'string' && el.className) || null,
                };
            }
            node = node.child;
        }
        return null;
    }

    function toSafe(value) {
        if (value === null || value === undefined) return null;
        const seen = new WeakSet();
        const replacer = (key, v) => {
            if (key.startsWith('_') || key.startsWith('$$')) return undefined;
            if (typeof Node !== 'undefined' && v instanceof Node) return undefined;
            if (typeof v === 'object' && v !== null) {
                if (seen.has(v)) return undefined;
                seen.add(v);
            }
            return v;
        };
        try {
            const text = JSON.stringify(value, replacer);
            return text === undefined ? null : JSON.parse(text);
        } catch (e) {
            return null;
        }
    }

    const root = findRootFiber();
    if (!root) return null;

    const ids = new Map();
    const idOf = (fiber) => {
        if (!fiber) return null;
        if (!ids.has(fiber)) ids.set(fiber, String(ids.size + 1));
        return ids.get(fiber);
    };

    const nodes = {};
    const stack = [root];
    while (stack.length) {
        const fiber = stack.pop();
        const id = idOf(fiber);
        if (nodes[id]) continue;
        const name = componentName(fiber);
        nodes[id] = {
            name,
            state: name === null ? null : toSafe(fiber.memoizedState),
            props: name === null ? null : toSafe(fiber.memoizedProps),
            host: name === null ? null : hostDescriptor(fiber),
            child: idOf(fiber.child),
            sibling: idOf(fiber.sibling),
        };
        if (fiber.sibling) stack.push(fiber.sibling);
        if (fiber.child) stack.push(fiber.child);
    }
    return { root: idOf(root), nodes };
}"""


class ReactFiberReader:
    """
    Finds the React root container under document.body and exposes the fiber
    tree as linked FiberNode handles. Host fibers (DOM elements, text, the
    HostRoot) come back with ``name=None``; component fibers carry a ``host``
    descriptor of the first DOM element down their child chain.
    """

    async def read(self, page: Page) -> FiberNode | None:
        table = await page.evaluate(_FIBER_TABLE_JS)
        if table is None:
            logger.info("No React root container found on %s", page.url)
            return None
        root = nodes_from_table(table)
        logger.debug("Read %d fibers from %s", len(table.get("nodes") or {}), page.url)
        return root
