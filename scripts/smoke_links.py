# быстрый смоук без БД: хранилище в памяти и вызов ядра
from shortlinks.db.repo.link_service import LinkService
from shortlinks.db.repo.link_store import LinkStore


class MemoryStore(LinkStore):
    def __init__(self):
        self.links = []

    def load_all(self):
        return list(self.links)

    def save_all(self, links):
        self.links = list(links)


service = LinkService(MemoryStore(), origin="http://localhost:3000")
res = service.create("https://example.com/some/long/path", validity_minutes=5)
print(res.error or res.summary.short_url)
if res.ok:
    print(service.resolve(res.summary.shortcode).status)
    print(service.compute_stats().totals)
