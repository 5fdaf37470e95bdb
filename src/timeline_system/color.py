"""
Color class - packed RGB integer with interpolation
"""


class Color(int):
    """Color that packs RGB into an integer
    
    Extends int so colors compare, hash and log cheaply, while exposing RGB
    components and linear blending for background transitions.
    
    Usage:
        sky = Color(0x4F, 0xB3, 0xE8)    # From components
        dark = Color(0x0B2A4A)           # From packed int
        mid = sky.blend(dark, 0.5)       # Halfway between
        surface.fill(mid.rgb)            # Tuple for pygame
    """
    
    def __new__(cls, r: int, g: int = None, b: int = None) -> 'Color':
        """Create color from RGB values or existing int
        
        Args:
            r: Red component (0-255) OR packed color integer
            g: Green component (0-255) OR None if r is packed color
            b: Blue component (0-255) OR None if r is packed color
        """
        if g is None and b is None:
            return int.__new__(cls, r & 0xFFFFFF)
        elif g is None or b is None:
            raise ValueError("Must provide either just int value or all three RGB values")
        else:
            return int.__new__(cls, ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF))
    
    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse '#RRGGBB' or 'RRGGBB'"""
        text = value.strip().lstrip('#')
        if len(text) != 6:
            raise ValueError(f"Expected 6 hex digits, got '{value}'")
        return cls(int(text, 16))
    
    @property
    def r(self) -> int:
        """Red component (0-255)"""
        return (self >> 16) & 0xFF
    
    @property
    def g(self) -> int:
        """Green component (0-255)"""
        return (self >> 8) & 0xFF
    
    @property
    def b(self) -> int:
        """Blue component (0-255)"""
        return self & 0xFF
    
    @property
    def rgb(self) -> tuple:
        """(r, g, b) tuple, the form pygame drawing calls expect"""
        return (self.r, self.g, self.b)
    
    def blend(self, other: 'Color', fraction: float) -> 'Color':
        """Linear blend toward other; fraction is clamped to 0.0-1.0"""
        t = min(1.0, max(0.0, fraction))
        return Color(
            round(self.r + (other.r - self.r) * t),
            round(self.g + (other.g - self.g) * t),
            round(self.b + (other.b - self.b) * t)
        )
    
    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b})"
    
    def __str__(self) -> str:
        return f"#{int(self):06X}"
