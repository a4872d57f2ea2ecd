from pystencil.reflection.api_dump import ApiDump, ClassInfo, PropertyInfo, get_api

__all__ = ["ApiDump", "ClassInfo", "PropertyInfo", "get_api"]
