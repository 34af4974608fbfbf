"""Sanitising of untrusted HTML fragments from feeds and pages."""

from __future__ import annotations

import re
from html.parser import HTMLParser

from yarr.content.htmlutil import absolute_url, url_domain

_SPLIT_SRCSET_RE = re.compile(r",\s+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)\Z",
    re.IGNORECASE,
)
_FLOAT32_MAX = 3.4028234663852886e38

_ALLOWED_TAGS = frozenset(
    """
    a abbr acronym address area article aside audio b bdi bdo big blink blockquote
    body br button canvas caption center cite code col colgroup content data
    datalist dd decorator del details dfn dialog dir div dl dt element em fieldset
    figcaption figure font footer form h1 h2 h3 h4 h5 h6 head header hgroup hr html
    i iframe img input ins kbd label legend li main map mark marquee menu menuitem
    meter nav nobr ol optgroup option output p picture pre progress q rp rt ruby s
    samp section select shadow small source spacer span strike strong sub summary
    sup table tbody td template textarea tfoot th thead time tr track tt u ul var
    video wbr
    """.split()
)

_ALLOWED_SVG_TAGS = frozenset(
    """
    svg a altglyph altglyphdef altglyphitem animatecolor animatemotion
    animatetransform circle clippath defs desc ellipse filter font g glyph glyphref
    hkern image line lineargradient marker mask metadata mpath path pattern polygon
    polyline radialgradient rect stop switch symbol text textpath title tref tspan
    view vkern
    """.split()
)

_ALLOWED_SVG_FILTERS = frozenset(
    """
    feBlend feColorMatrix feComponentTransfer feComposite feConvolveMatrix
    feDiffuseLighting feDisplacementMap feDistantLight feFlood feFuncA feFuncB
    feFuncG feFuncR feGaussianBlur feMerge feMergeNode feMorphology feOffset
    fePointLight feSpecularLighting feSpotLight feTile feTurbulence
    """.split()
)

_ALLOWED_ATTRS = {
    "img": frozenset({"alt", "title", "src", "srcset", "sizes"}),
    "audio": frozenset({"src"}),
    "video": frozenset({"poster", "height", "width", "src"}),
    "source": frozenset({"src", "type", "srcset", "sizes", "media"}),
    "td": frozenset({"rowspan", "colspan"}),
    "th": frozenset({"rowspan", "colspan"}),
    "q": frozenset({"cite"}),
    "a": frozenset({"href", "title"}),
    "time": frozenset({"datetime"}),
    "abbr": frozenset({"title"}),
    "acronym": frozenset({"title"}),
    "iframe": frozenset({"width", "height", "frameborder", "src", "allowfullscreen"}),
}

_ALLOWED_SVG_ATTRS = frozenset(
    """
    accent-height accumulate additive alignment-baseline ascent attributename
    attributetype azimuth basefrequency baseline-shift begin bias by class clip
    clippathunits clip-path clip-rule color color-interpolation
    color-interpolation-filters color-profile color-rendering cx cy d dx dy
    diffuseconstant direction display divisor dur edgemode elevation end fill
    fill-opacity fill-rule filter filterunits flood-color flood-opacity font-family
    font-size font-size-adjust font-stretch font-style font-variant font-weight fx fy
    g1 g2 glyph-name glyphref gradientunits gradienttransform height href id
    image-rendering in in2 k k1 k2 k3 k4 kerning keypoints keysplines keytimes lang
    lengthadjust letter-spacing kernelmatrix kernelunitlength lighting-color local
    marker-end marker-mid marker-start markerheight markerunits markerwidth
    maskcontentunits maskunits max mask media method mode min name numoctaves offset
    operator opacity order orient orientation origin overflow paint-order path
    pathlength patterncontentunits patterntransform patternunits points
    preservealpha preserveaspectratio primitiveunits r rx ry radius refx refy
    repeatcount repeatdur restart result rotate scale seed shape-rendering
    specularconstant specularexponent spreadmethod startoffset stddeviation
    stitchtiles stop-color stop-opacity stroke-dasharray stroke-dashoffset
    stroke-linecap stroke-linejoin stroke-miterlimit stroke-opacity stroke
    stroke-width surfacescale systemlanguage tabindex targetx targety transform
    text-anchor text-decoration text-rendering textlength type u1 u2 unicode values
    viewbox visibility version vert-adv-y vert-origin-x vert-origin-y width
    word-spacing wrap writing-mode xchannelselector ychannelselector x x1 x2 xmlns y
    y1 y2 z zoomandpan
    """.split()
)

_ALLOWED_URI_SCHEMES = frozenset(
    {"http", "https", "ftp", "ftps", "tel", "mailto", "callto", "cid", "xmpp"}
)

_EXTERNAL_RESOURCE_ATTRS = frozenset({"src", "href", "poster", "cite"})

_REQUIRED_ATTRS = {
    "a": frozenset({"href"}),
    "iframe": frozenset({"src"}),
    "img": frozenset({"src"}),
    "source": frozenset({"src", "srcset"}),
}

_EXTRA_ATTRS = {
    "a": (
        ("rel", 'rel="noopener noreferrer"'),
        ("target", 'target="_blank"'),
        ("referrerpolicy", 'referrerpolicy="no-referrer"'),
    ),
    "video": (("controls", "controls"),),
    "audio": (("controls", "controls"),),
    "iframe": (
        ("sandbox", 'sandbox="allow-scripts allow-same-origin allow-popups"'),
        ("loading", 'loading="lazy"'),
    ),
    "img": (("loading", 'loading="lazy"'),),
}

_BLOCKED_RESOURCES = (
    "feedsportal.com",
    "api.flattr.com",
    "stats.wordpress.com",
    "plus.google.com/share",
    "twitter.com/share",
    "feeds.feedburner.com",
)

_IFRAME_SOURCES = frozenset(
    {
        "bandcamp.com",
        "cdn.embedly.com",
        "invidio.us",
        "player.bilibili.com",
        "player.vimeo.com",
        "soundcloud.com",
        "vk.com",
        "w.soundcloud.com",
        "www.dailymotion.com",
        "www.youtube-nocookie.com",
        "www.youtube.com",
    }
)

_VIDEO_SOURCES = frozenset(
    {
        "player.bilibili.com",
        "player.vimeo.com",
        "www.dailymotion.com",
        "www.youtube-nocookie.com",
        "www.youtube.com",
    }
)

_BLOCKED_TAGS = frozenset({"noscript", "script", "style"})

_DATA_URL_PREFIXES = (
    "data:image/avif",
    "data:image/apng",
    "data:image/png",
    "data:image/svg",
    "data:image/svg+xml",
    "data:image/jpg",
    "data:image/jpeg",
    "data:image/gif",
    "data:image/webp",
)

_ESCAPES = str.maketrans(
    {"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"}
)


def _escape(value: str) -> str:
    return value.translate(_ESCAPES)


def _is_valid_tag(tag: str) -> bool:
    return tag in _ALLOWED_TAGS or tag in _ALLOWED_SVG_TAGS or tag in _ALLOWED_SVG_FILTERS


def _is_valid_attribute(tag: str, name: str) -> bool:
    allowed = _ALLOWED_ATTRS.get(tag)
    if allowed is not None:
        return name in allowed
    if tag in _ALLOWED_SVG_TAGS:
        return name in _ALLOWED_SVG_ATTRS
    return False


def _has_required_attributes(tag: str, names: list[str]) -> bool:
    required = _REQUIRED_ATTRS.get(tag)
    if required is None:
        return True
    return any(name in required for name in names)


def _has_valid_uri_scheme(src: str) -> bool:
    return src.split(":", 1)[0] in _ALLOWED_URI_SCHEMES


def _is_blocked_resource(src: str) -> bool:
    return any(blocked in src for blocked in _BLOCKED_RESOURCES)


def _is_valid_iframe_source(base_url: str, src: str) -> bool:
    domain = url_domain(src)
    return url_domain(base_url) == domain or domain in _IFRAME_SOURCES


def _is_valid_data_attribute(value: str) -> bool:
    return value.startswith(_DATA_URL_PREFIXES)


def _is_valid_descriptor(value: str) -> bool:
    """Tell whether a srcset entry ends in a width (w) or density (x) descriptor."""
    if not value or value[-1] not in "wx":
        return False
    number = value[:-1]
    if not _FLOAT_RE.match(number):
        return False
    parsed = abs(float(number))
    return parsed == float("inf") and "inf" in number.lower() or not parsed > _FLOAT32_MAX


def _sanitize_srcset(base_url: str, value: str) -> str:
    sources = []
    for raw_source in _SPLIT_SRCSET_RE.split(value):
        parts = raw_source.strip().split(" ")
        source = parts[0]
        if not source.startswith("data:"):
            source = absolute_url(source, base_url)
            if not source:
                continue
        if len(parts) == 2 and _is_valid_descriptor(parts[1]):
            source += " " + parts[1]
        sources.append(source)
    return ", ".join(sources)


def _is_video_iframe(tag: str, attributes: list[tuple[str, str]]) -> bool:
    if tag != "iframe":
        return False
    src = next((value for name, value in attributes if name == "src"), None)
    return src is not None and url_domain(src) in _VIDEO_SOURCES


def _sanitize_attributes(
    base_url: str, tag: str, attributes: list[tuple[str, str]]
) -> tuple[list[str], str]:
    names: list[str] = []
    rendered: list[str] = []
    for name, raw in attributes:
        if not _is_valid_attribute(tag, name):
            continue
        value = raw
        if tag in ("img", "source") and name == "srcset":
            value = _sanitize_srcset(base_url, value)

        if name in _EXTERNAL_RESOURCE_ATTRS:
            if tag == "iframe":
                if not _is_valid_iframe_source(base_url, raw):
                    continue
                value = raw
            elif tag == "img" and name == "src" and _is_valid_data_attribute(raw):
                value = raw
            else:
                value = absolute_url(value, base_url)
                if not value or not _has_valid_uri_scheme(value) or _is_blocked_resource(value):
                    continue

        names.append(name)
        rendered.append(f'{name}="{_escape(value)}"')

    for name, html in _EXTRA_ATTRS.get(tag, ()):
        names.append(name)
        rendered.append(html)
    return names, " ".join(rendered)


class _Sanitizer(HTMLParser):
    # Elements whose content is raw text rather than markup.
    CDATA_CONTENT_ELEMENTS = (
        "iframe", "noembed", "noframes", "noscript", "plaintext", "script", "style", "xmp",
    )

    def __init__(self, base_url: str) -> None:
        super().__init__(convert_charrefs=True)
        self.base_url = base_url
        self.out: list[str] = []
        self.opened: set[str] = set()
        self.parent_tag = ""
        self.blocked_depth = 0

    def handle_data(self, data: str) -> None:
        if self.blocked_depth > 0 or self.parent_tag == "iframe":
            return
        self.out.append(_escape(data))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.parent_tag = tag
        attributes = [(name, value or "") for name, value in attrs]
        if _is_valid_tag(tag):
            names, rendered = _sanitize_attributes(self.base_url, tag, attributes)
            if not _has_required_attributes(tag, names):
                return
            wrap = _is_video_iframe(tag, attributes)
            if wrap:
                self.out.append('<div class="video-wrapper">')
            self.out.append(f"<{tag} {rendered}>" if names else f"<{tag}>")
            if tag == "iframe":
                self.out.append("</iframe>")
                if wrap:
                    self.out.append("</div>")
            else:
                self.opened.add(tag)
        elif tag in _BLOCKED_TAGS:
            self.blocked_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag == "iframe":
            return
        if _is_valid_tag(tag) and tag in self.opened:
            self.out.append(f"</{tag}>")
        elif tag in _BLOCKED_TAGS:
            self.blocked_depth -= 1

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if not _is_valid_tag(tag):
            return
        attributes = [(name, value or "") for name, value in attrs]
        names, rendered = _sanitize_attributes(self.base_url, tag, attributes)
        if _has_required_attributes(tag, names):
            self.out.append(f"<{tag} {rendered}/>" if names else f"<{tag}/>")


def sanitize(base_url: str, input_html: str) -> str:
    """Return a safe version of an HTML fragment, resolving URLs against ``base_url``."""
    parser = _Sanitizer(base_url)
    parser.feed(input_html)
    parser.close()
    return "".join(parser.out)