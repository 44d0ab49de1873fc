"""
Basic usage - Add, list and delete classpaths
"""
from classpaths import ClasspathService, ClasspathRecord, SQLiteStore, ClasspathException


def main():
    with SQLiteStore("classpath.db") as store:
        service = ClasspathService(store)
        
        # Paths nest by prefix: "infraweb" lives under "infra"
        for path in ("infra", "infraweb", "infraweb-api", "infradb"):
            if service.get_by_path(path) is None:
                service.add(ClasspathRecord(path=path, create_by="admin"))
        
        print(f"Total: {service.total()}")
        for record in service.list(limit=10):
            print(f"{record.id:>4}  {record.path}")
        
        # Paths may not contain whitespace
        try:
            service.add(ClasspathRecord(path="team a"))
        except ClasspathException as e:
            print(f"Rejected: {e}")
        
        # Classpaths with bound resources cannot be deleted
        api = service.get_by_path("infraweb-api")
        service.attach_resources(api.id, ["host-1", "host-2"])
        try:
            service.delete(api)
        except ClasspathException as e:
            print(f"Rejected: {e}")
        
        service.detach_resources(api.id, ["host-1", "host-2"])
        service.delete(api)


if __name__ == "__main__":
    main()
