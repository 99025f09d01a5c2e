"""
JavaScript Evaluators - Code snippets for Playwright page.evaluate().

Every snippet returns plain, JSON-serializable data (no DOM nodes). Element
locators use the `tag[index]` form where index is the position in the
snippet's own query result.
"""


class JSEvaluators:
    """
    JavaScript code snippets for DOM probes.

    Snippets taking an argument are arrow functions; pass the argument as
    the second parameter of page.evaluate().
    """

    # =========================================================================
    # CONTENT
    # =========================================================================

    BROKEN_IMAGES = """
    () => {
        return Array.from(document.querySelectorAll('img'))
            .map((img, index) => ({
                index,
                element: `img[${index}]`,
                src: img.getAttribute('src') || '',
                complete: img.complete,
                naturalHeight: img.naturalHeight,
            }))
            .filter(img => !img.complete || img.naturalHeight === 0);
    }
    """

    MISSING_ALT = """
    () => {
        return Array.from(document.querySelectorAll('img'))
            .map((img, index) => ({
                index,
                element: `img[${index}]`,
                src: img.getAttribute('src') || '',
                hasAlt: img.hasAttribute('alt'),
            }))
            .filter(img => !img.hasAlt);
    }
    """

    # Only elements with their own non-empty text node are measured, so a
    # container is not flagged for text that belongs to its children.
    SMALL_TEXT = """
    (minSize) => {
        const problems = [];
        document.querySelectorAll('body *').forEach((el, index) => {
            const ownText = Array.from(el.childNodes)
                .filter(n => n.nodeType === Node.TEXT_NODE)
                .map(n => n.textContent.trim())
                .join('');
            if (!ownText) return;
            const fontSize = parseFloat(window.getComputedStyle(el).fontSize);
            if (fontSize < minSize) {
                problems.push({
                    index,
                    element: `${el.tagName.toLowerCase()}[${index}]`,
                    fontSize,
                    text: ownText.slice(0, 50),
                });
            }
        });
        return problems;
    }
    """

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    LINK_INVENTORY = """
    () => {
        const strip = (href) => href.split('#')[0];
        const current = strip(window.location.href);
        const seen = new Set();
        const links = [];
        document.querySelectorAll('a[href]').forEach(a => {
            let target;
            try {
                target = new URL(a.href);
            } catch (e) {
                return;
            }
            if (target.origin !== window.location.origin) return;
            const href = strip(target.href);
            if (href === current || seen.has(href)) return;
            seen.add(href);
            links.push({ href, text: (a.textContent || '').trim().slice(0, 80) });
        });
        return { origin: window.location.origin, current, links };
    }
    """

    # =========================================================================
    # FORMS
    # =========================================================================

    FORM_STRUCTURE = """
    () => {
        const submitSelector =
            'input[type="submit"], button[type="submit"], button:not([type])';
        return Array.from(document.querySelectorAll('form')).map((form, index) => ({
            index,
            element: `form[${index}]`,
            action: form.getAttribute('action') || '',
            method: (form.getAttribute('method') || 'GET').toUpperCase(),
            inputCount: form.querySelectorAll('input, textarea, select').length,
            hasSubmitButton: form.querySelector(submitSelector) !== null,
        }));
    }
    """

    MISSING_LABELS = """
    () => {
        const skipped = new Set(['hidden', 'submit', 'button', 'reset', 'image']);
        const problems = [];
        document.querySelectorAll('input, textarea, select').forEach((input, index) => {
            const type = (input.getAttribute('type') || '').toLowerCase();
            if (input.tagName === 'INPUT' && skipped.has(type)) return;

            const id = input.getAttribute('id');
            const forLabel = id ? document.querySelector(`label[for="${CSS.escape(id)}"]`) : null;
            const wrapped = input.closest('label') !== null;
            const ariaLabel = (input.getAttribute('aria-label') || '').trim();
            const labelledBy = input.getAttribute('aria-labelledby');

            if (!forLabel && !wrapped && !ariaLabel && !labelledBy) {
                problems.push({
                    index,
                    element: `${input.tagName.toLowerCase()}[${index}]`,
                    type: type || input.tagName.toLowerCase(),
                    name: input.getAttribute('name') || '',
                });
            }
        });
        return problems;
    }
    """

    # =========================================================================
    # LAYOUT
    # =========================================================================

    HORIZONTAL_OVERFLOW = """
    () => ({
        scrollWidth: document.documentElement.scrollWidth,
        innerWidth: window.innerWidth,
        overflow: document.documentElement.scrollWidth > window.innerWidth,
    })
    """

    # Elements without client rects are not rendered at all (inside a
    # display:none ancestor, a closed <details>, an <option>), so only
    # rendered boxes collapsed to zero width or height are reported.
    ZERO_AREA_ELEMENTS = """
    () => {
        const ignored = new Set(['SCRIPT', 'STYLE', 'NOSCRIPT', 'TEMPLATE', 'META', 'LINK', 'BR']);
        const found = [];
        document.querySelectorAll('body *').forEach((el, index) => {
            if (ignored.has(el.tagName)) return;
            if (el.getClientRects().length === 0) return;
            const style = window.getComputedStyle(el);
            if (style.visibility === 'hidden') return;
            if (!(el.textContent || '').trim()) return;
            const rect = el.getBoundingClientRect();
            if (rect.width === 0 || rect.height === 0) {
                found.push({
                    index,
                    element: `${el.tagName.toLowerCase()}[${index}]`,
                    width: rect.width,
                    height: rect.height,
                });
            }
        });
        return found;
    }
    """

    # =========================================================================
    # PERFORMANCE
    # =========================================================================

    PERFORMANCE_METRICS = """
    () => {
        const nav = performance.getEntriesByType('navigation')[0];
        const paint = (name) => {
            const entry = performance.getEntriesByType('paint').find(e => e.name === name);
            return entry ? entry.startTime : 0;
        };
        const memory = performance.memory || null;
        return {
            loadTime: nav ? nav.loadEventEnd - nav.startTime : 0,
            domContentLoaded: nav ? nav.domContentLoadedEventEnd - nav.startTime : 0,
            firstPaint: paint('first-paint'),
            firstContentfulPaint: paint('first-contentful-paint'),
            heapUsed: memory ? memory.usedJSHeapSize : null,
            heapTotal: memory ? memory.totalJSHeapSize : null,
        };
    }
    """
