from fastapi import APIRouter, Depends

from praxis.api.deps import get_catalog_dep
from praxis.content.catalog import Catalog

router = APIRouter(prefix="/curriculum", tags=["curriculum"])


@router.get("")
async def get_curriculum(catalog: Catalog = Depends(get_catalog_dep)):
    """Ordered domain/module/lesson tree with the simulations each domain relates to."""
    return {
        "stats": catalog.stats(),
        "domains": [
            {
                "id": domain.id,
                "title": domain.title,
                "modules": [
                    {
                        "id": module.id,
                        "number": module.number,
                        "title": module.title,
                        "lessons": [
                            {"id": lesson.id, "number": lesson.number, "title": lesson.title}
                            for lesson in sorted(module.lessons, key=lambda l: l.number)
                        ],
                    }
                    for module in sorted(domain.modules, key=lambda m: m.number)
                ],
                "related_simulations": [s.case_id for s in catalog.related_simulations(domain.id)],
            }
            for domain in catalog.domains
        ],
    }
