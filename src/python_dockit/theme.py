"""
Office theme part (theme/theme1.xml), shared by documents and workbooks.

The theme carries the color scheme, the major/minor font pair and the default
format scheme. Only colors and fonts are configurable; the format scheme is the
stock Office one.
"""

from .constants import A_NAMESPACE
from .xmlutil import XML_DECLARATION, escape_xml

# Slot name -> sRGB hex. dk1/lt1 are written as system colors.
DEFAULT_COLOR_SCHEME = {
    "dk1": "000000",
    "lt1": "FFFFFF",
    "dk2": "1F497D",
    "lt2": "EEECE1",
    "accent1": "4F81BD",
    "accent2": "C0504D",
    "accent3": "9BBB59",
    "accent4": "8064A2",
    "accent5": "4BACC6",
    "accent6": "F79646",
    "hlink": "0000FF",
    "folHlink": "800080",
}

_SYSTEM_COLORS = {"dk1": "windowText", "lt1": "window"}

_FORMAT_SCHEME = (
    '<a:fmtScheme name="Office">'
    "<a:fillStyleLst>"
    '<a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="50000"/>'
    '<a:satMod val="300000"/></a:schemeClr></a:gs>'
    '<a:gs pos="35000"><a:schemeClr val="phClr"><a:tint val="37000"/>'
    '<a:satMod val="300000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:tint val="15000"/>'
    '<a:satMod val="350000"/></a:schemeClr></a:gs>'
    '</a:gsLst><a:lin ang="16200000" scaled="1"/></a:gradFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:shade val="51000"/>'
    '<a:satMod val="130000"/></a:schemeClr></a:gs>'
    '<a:gs pos="80000"><a:schemeClr val="phClr"><a:shade val="93000"/>'
    '<a:satMod val="130000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="94000"/>'
    '<a:satMod val="135000"/></a:schemeClr></a:gs>'
    '</a:gsLst><a:lin ang="16200000" scaled="0"/></a:gradFill>'
    "</a:fillStyleLst>"
    "<a:lnStyleLst>"
    '<a:ln w="9525" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr">'
    '<a:shade val="95000"/><a:satMod val="105000"/></a:schemeClr></a:solidFill>'
    '<a:prstDash val="solid"/></a:ln>'
    '<a:ln w="25400" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/>'
    '</a:solidFill><a:prstDash val="solid"/></a:ln>'
    '<a:ln w="38100" cap="flat" cmpd="sng" algn="ctr"><a:solidFill><a:schemeClr val="phClr"/>'
    '</a:solidFill><a:prstDash val="solid"/></a:ln>'
    "</a:lnStyleLst>"
    "<a:effectStyleLst>"
    "<a:effectStyle><a:effectLst/></a:effectStyle>"
    "<a:effectStyle><a:effectLst/></a:effectStyle>"
    "<a:effectStyle><a:effectLst/></a:effectStyle>"
    "</a:effectStyleLst>"
    "<a:bgFillStyleLst>"
    '<a:solidFill><a:schemeClr val="phClr"/></a:solidFill>'
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="40000"/>'
    '<a:satMod val="350000"/></a:schemeClr></a:gs>'
    '<a:gs pos="40000"><a:schemeClr val="phClr"><a:tint val="45000"/><a:shade val="99000"/>'
    '<a:satMod val="350000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="20000"/>'
    '<a:satMod val="255000"/></a:schemeClr></a:gs>'
    '</a:gsLst>'
    '<a:path path="circle"><a:fillToRect l="50000" t="50000" r="50000" b="50000"/></a:path>'
    "</a:gradFill>"
    '<a:gradFill rotWithShape="1"><a:gsLst>'
    '<a:gs pos="0"><a:schemeClr val="phClr"><a:tint val="80000"/>'
    '<a:satMod val="300000"/></a:schemeClr></a:gs>'
    '<a:gs pos="100000"><a:schemeClr val="phClr"><a:shade val="30000"/>'
    '<a:satMod val="200000"/></a:schemeClr></a:gs>'
    '</a:gsLst>'
    '<a:path path="circle"><a:fillToRect l="50000" t="50000" r="50000" b="50000"/></a:path>'
    "</a:gradFill>"
    "</a:bgFillStyleLst>"
    "</a:fmtScheme>"
)


class Theme:
    """Theme part with a configurable color scheme and font pair.

    Example:
        >>> theme = Theme()
        >>> theme.set_fonts(major="Cambria", minor="Calibri")
        >>> theme.set_color("accent1", "2E75B6")
    """

    def __init__(self, name: str = "Office Theme") -> None:
        self.name = name
        self.major_font = "Calibri"
        self.minor_font = "Calibri"
        self.colors = dict(DEFAULT_COLOR_SCHEME)

    def set_fonts(self, major: str | None = None, minor: str | None = None) -> "Theme":
        if major is not None:
            self.major_font = major
        if minor is not None:
            self.minor_font = minor
        return self

    def set_color(self, slot: str, rgb: str) -> "Theme":
        """Override one color slot (e.g., "accent1") with an sRGB hex value."""
        self.colors[slot] = rgb
        return self

    def _color_scheme_xml(self) -> str:
        parts = ['<a:clrScheme name="Office">']
        for slot in DEFAULT_COLOR_SCHEME:
            value = escape_xml(self.colors[slot])
            if slot in _SYSTEM_COLORS:
                color = f'<a:sysClr val="{_SYSTEM_COLORS[slot]}" lastClr="{value}"/>'
            else:
                color = f'<a:srgbClr val="{value}"/>'
            parts.append(f"<a:{slot}>{color}</a:{slot}>")
        parts.append("</a:clrScheme>")
        return "".join(parts)

    def _font_scheme_xml(self) -> str:
        def font(tag: str, typeface: str) -> str:
            return (
                f'<a:{tag}><a:latin typeface="{escape_xml(typeface)}"/>'
                f'<a:ea typeface=""/><a:cs typeface=""/></a:{tag}>'
            )

        return (
            '<a:fontScheme name="Office">'
            f"{font('majorFont', self.major_font)}"
            f"{font('minorFont', self.minor_font)}"
            "</a:fontScheme>"
        )

    def to_xml(self) -> str:
        return (
            f"{XML_DECLARATION}"
            f'<a:theme xmlns:a="{A_NAMESPACE}" name="{escape_xml(self.name)}">'
            "<a:themeElements>"
            f"{self._color_scheme_xml()}"
            f"{self._font_scheme_xml()}"
            f"{_FORMAT_SCHEME}"
            "</a:themeElements>"
            "<a:objectDefaults/>"
            "<a:extraClrSchemeLst/>"
            "</a:theme>"
        )
